# oslabkit

Small operating-systems lab programs and the algorithms behind them. Every
algorithm can be called from Python, and each module has a command that reads
its input from standard input and prints its results.

The process and pipe demonstrations use `os.fork`, so the package runs on
POSIX systems only.

## What is inside

| Module | What it covers |
| --- | --- |
| `oslabkit.scheduling` | CPU scheduling: FCFS, preemptive SJF, non-preemptive priority and round robin |
| `oslabkit.paging` | Page replacement: FIFO, LRU and optimal |
| `oslabkit.banker` | The banker's algorithm: safety check and resource requests |
| `oslabkit.pipes` | Passing data between a parent and a forked child through pipes |
| `oslabkit.processes` | Forking, running work in a child process, `exec`, and small array exercises |
| `oslabkit.threads` | Per-cell threaded matrix multiplication, sums in threads, a hello thread |
| `oslabkit.students` | A file of fixed-size binary student records with add, list, update and delete |

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Commands

```
oslabkit-schedule [menu|fcfs|sjf|priority|rr]
oslabkit-paging   [menu|fifo|lru|optimal]
oslabkit-banker   [menu|safety|request]
oslabkit-pipes    {message,sum,upper}
oslabkit-processes {pid,sort-order,sort,sum,vowels,exec,exec-add,add} [args ...]
oslabkit-threads  {hello,matrix,matrix-input,sum}
oslabkit-students [--file PATH]
```

- `oslabkit-schedule`, `oslabkit-paging` and `oslabkit-banker` default to
  `menu`: they read their input once, then offer a menu until `0` or end of
  input. The other choices run one algorithm and exit.
- `oslabkit-pipes message` sends `Hello` to a child; `sum` sends the numbers
  1 to 10 and prints the sum the child returns; `upper` reads a word and
  prints the child's upper-cased copy.
- `oslabkit-processes exec` replaces the child with `/bin/ls -l`;
  `exec-add` replaces it with `oslabkit-processes add 5 6`; `add A B` prints
  the sum of two integers with its process and parent process IDs.
- `oslabkit-students` keeps its records in `studdb.txt` unless `--file` is
  given.

## Using it from Python

```python
from oslabkit.processes import sort_ascending, sort_descending, count_vowels
from oslabkit.threads import multiply_matrices, triangular_sum

sort_ascending([3, 1, 2])     # [1, 2, 3]
sort_descending([3, 1, 2])    # [3, 2, 1]
count_vowels("Hello World")   # 3
triangular_sum(10)            # 55
multiply_matrices([[1, 2], [3, 4]], [[5, 6], [7, 8]])  # [[19, 22], [43, 50]]
```

`oslabkit.processes` also has `selection_sort`, `insertion_sort`,
`array_sum` and `array_product` (both with 32-bit wrap-around),
`add_arguments` and `run_in_child(func, *args)`, which calls a function in a
forked child and returns its result, raising again any exception it raised.

### Scheduling

`fcfs`, `sjf_preemptive`, `priority_nonpreemptive` and
`round_robin(processes, quantum)` take `ProcessSpec` values and return a
`Schedule` of `ScheduledProcess` entries. `format_schedule` renders the
table; `average_turnaround()` and `average_waiting()` give the averages.
A lower priority number means a higher priority. Round robin stops after a
pass in which no arrived process had work left, so a process arriving after
that point is left unscheduled (its times are `None`).

### Page replacement

```python
from oslabkit.paging import fifo, lru, optimal, format_result

result = lru([7, 0, 1, 2, 0, 3, 0, 4], 3)
print(result.faults)
print(format_result(result, blank=True))
```

`PagingResult.steps` holds each referenced page with the frames after it;
empty frames are `None`, rendered as `_` with `blank=True` and `-1` otherwise.

### Banker's algorithm

`BankerState(allocation, maximum, available)` offers `need()`,
`safe_sequence()` (a list of process indices, or `None` if unsafe),
`is_safe()` and `request(pid, request)`, which returns a `RequestOutcome`:
`GRANTED`, `EXCEEDS_CLAIM`, `MUST_WAIT` or `UNSAFE`. Only a granted request
changes the state.

### Pipes

`pipe_message(message)`, `pipe_sum(values)` and `pipe_upper(word)` each fork
a child and exchange data with it through a pair of pipes.

### Student records

`StudentDatabase(path)` stores `Student(roll, name, marks)` records of 60
bytes each. `add` appends, `all` lists (raising `FileNotFoundError` if the
file is missing), `update` rewrites the first record with a roll number and
`delete` removes every record with it; both return whether one was found.
Names must be shorter than 50 bytes.