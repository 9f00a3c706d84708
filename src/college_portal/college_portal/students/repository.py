from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student, Subject


class StudentRepository(Protocol):
    def list_all(self) -> Sequence[Student]:
        """Every student, active or not, in roster order."""

        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def save_all(self, students: Sequence[Student]) -> None:
        raise NotImplementedError


class SubjectRepository(Protocol):
    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError
