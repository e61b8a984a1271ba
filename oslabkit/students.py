"""Fixed-size binary student records kept in a flat file."""

from __future__ import annotations

import argparse
import os
import struct
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, TextIO

DEFAULT_FILE = "studdb.txt"
NAME_SIZE = 50
# int roll, char name[50], two bytes of alignment padding, int marks
_RECORD = struct.Struct(f"<i{NAME_SIZE}s2xi")
RECORD_SIZE = _RECORD.size

_MENU = (
    "\nStudent Data\n"
    "1. Add a student\n"
    "2. Display all students in database\n"
    "3. Modify a student\n"
    "4. Delete a student data\n"
    "5. Exit program\n"
    "Enter your choice: "
)


@dataclass(frozen=True)
class Student:
    """One student record."""

    roll: int
    name: str
    marks: int

    def to_bytes(self) -> bytes:
        """Encode as a fixed-size record."""
        encoded = self.name.encode()
        if b"\0" in encoded:
            raise ValueError("name must not contain NUL characters")
        if len(encoded) >= NAME_SIZE:
            raise ValueError(f"name must be shorter than {NAME_SIZE} bytes")
        try:
            return _RECORD.pack(self.roll, encoded, self.marks)
        except struct.error as exc:
            raise ValueError(f"roll and marks must fit in 32 bits: {exc}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> Student:
        """Decode one fixed-size record."""
        if len(data) != RECORD_SIZE:
            raise ValueError(f"a record is {RECORD_SIZE} bytes, got {len(data)}")
        roll, raw_name, marks = _RECORD.unpack(data)
        name = raw_name.split(b"\0", 1)[0].decode(errors="replace")
        return cls(roll, name, marks)


def _chunks(stream: BinaryIO) -> Iterator[bytes]:
    """Yield whole records; a trailing partial record is ignored."""
    while len(chunk := stream.read(RECORD_SIZE)) == RECORD_SIZE:
        yield chunk


class StudentDatabase:
    """A file of student records stored back to back."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_FILE) -> None:
        self.path = Path(path)

    def add(self, student: Student) -> None:
        """Append a record, creating the file if needed."""
        record = student.to_bytes()
        with self.path.open("ab") as stream:
            stream.write(record)

    def all(self) -> list[Student]:
        """Every stored record in file order; raises FileNotFoundError if absent."""
        with self.path.open("rb") as stream:
            return [Student.from_bytes(chunk) for chunk in _chunks(stream)]

    def update(self, roll: int, name: str, marks: int) -> bool:
        """Rewrite the first record with this roll number; False if there is none."""
        record = Student(roll, name, marks).to_bytes()
        with self.path.open("r+b") as stream:
            offset = 0
            for chunk in _chunks(stream):
                if Student.from_bytes(chunk).roll == roll:
                    stream.seek(offset)
                    stream.write(record)
                    return True
                offset += RECORD_SIZE
        return False

    def delete(self, roll: int) -> bool:
        """Remove every record with this roll number; False if there was none."""
        temp = self.path.with_name(self.path.name + ".tmp")
        found = False
        try:
            with self.path.open("rb") as source, temp.open("wb") as target:
                for chunk in _chunks(source):
                    if Student.from_bytes(chunk).roll == roll:
                        found = True
                    else:
                        target.write(chunk)
        except BaseException:
            temp.unlink(missing_ok=True)
            raise
        os.replace(temp, self.path)
        return found


class _Prompter:
    def __init__(self, stream: TextIO, out: TextIO) -> None:
        self._stream = stream
        self._out = out

    def _nonblank(self, prompt: str) -> str:
        self._out.write(prompt)
        self._out.flush()
        while True:
            line = self._stream.readline()
            if not line:
                raise EOFError
            if line.strip():
                return line

    def ask_int(self, prompt: str) -> int:
        token = self._nonblank(prompt).split()[0]
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None

    def ask_text(self, prompt: str) -> str:
        return self._nonblank(prompt).strip()


def _add(db: StudentDatabase, prompter: _Prompter) -> None:
    roll = prompter.ask_int("Enter Roll Number: ")
    name = prompter.ask_text("Enter Name: ")
    marks = prompter.ask_int("Enter Marks: ")
    try:
        db.add(Student(roll, name, marks))
    except OSError:
        print("Error opening file!")
        return
    print("Student added successfully!")


def _display(db: StudentDatabase) -> None:
    try:
        students = db.all()
    except FileNotFoundError:
        print("No student records found.")
        return
    print("\nRoll\tName\t\tMarks")
    print("-" * 32)
    for student in students:
        print(f"{student.roll}\t{student.name}\t{student.marks}")


def _update(db: StudentDatabase, prompter: _Prompter) -> None:
    try:
        students = db.all()
    except FileNotFoundError:
        print("No student records found.")
        return
    roll = prompter.ask_int("Enter Roll Number to update: ")
    if not any(student.roll == roll for student in students):
        print(f"Student with Roll No. {roll} not found.")
        return
    name = prompter.ask_text("Enter new Name: ")
    marks = prompter.ask_int("Enter new Marks: ")
    db.update(roll, name, marks)
    print("Student record updated successfully.")


def _delete(db: StudentDatabase, prompter: _Prompter) -> None:
    if not db.path.exists():
        print("No student records found.")
        return
    roll = prompter.ask_int("Enter Roll Number to delete: ")
    if db.delete(roll):
        print("Student record deleted successfully.")
    else:
        print(f"Student with Roll No. {roll} not found.")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oslabkit-students", description="Manage a file of student records."
    )
    parser.add_argument("--file", default=DEFAULT_FILE, help="database file")
    args = parser.parse_args(argv)
    db = StudentDatabase(args.file)
    prompter = _Prompter(sys.stdin, sys.stdout)
    while True:
        try:
            try:
                choice = prompter.ask_int(_MENU)
            except ValueError:
                print("Invalid choice!")
                continue
            if choice == 1:
                _add(db, prompter)
            elif choice == 2:
                _display(db)
            elif choice == 3:
                _update(db, prompter)
            elif choice == 4:
                _delete(db, prompter)
            elif choice == 5:
                return 0
            else:
                print("Invalid choice!")
        except EOFError:
            return 0
        except ValueError as exc:
            print(f"error: {exc}")


if __name__ == "__main__":
    sys.exit(main())