from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..storage.manager import StorageManager
from .model import Student, Subject
from .repository import StudentRepository, SubjectRepository


class StorageStudentRepository(StudentRepository):
    def __init__(self, storage: StorageManager, *, seed: Optional[Callable[[], Sequence[Student]]] = None):
        self._storage = storage
        self._seed = seed

    def list_all(self) -> Sequence[Student]:
        raw = self._storage.get_students()
        if not raw:
            return list(self._seed()) if self._seed else []
        return [Student.from_dict(r) for r in raw if isinstance(r, dict)]

    def get_by_id(self, record_id: str) -> Optional[Student]:
        return next((s for s in self.list_all() if s.id == record_id), None)

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.list_all() if s.student_id == student_id), None)

    def save_all(self, students: Sequence[Student]) -> None:
        self._storage.save_students([s.to_dict() for s in students])


class StaticSubjectRepository(SubjectRepository):
    """Subjects are reference data; they are not editable from the portal."""

    def __init__(self, subjects: Sequence[Subject]):
        self._subjects = list(subjects)

    def list_all(self) -> Sequence[Subject]:
        return list(self._subjects)
