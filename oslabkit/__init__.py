"""Operating-systems lab exercises: CPU scheduling, page replacement, the banker's algorithm, pipes, processes, threads and student records."""

__version__ = "0.1.0"