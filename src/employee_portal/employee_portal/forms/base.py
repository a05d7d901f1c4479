from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import AuthorizationError, DataAccessError, ValidationError
from ..profiles.service import SessionUser


class BaseForm(ABC):
    """A modal form: holds the submitted values, validates and saves them.

    On failure ``error`` is set and the caller re-renders the modal with the
    same values; on success the caller's ``on_success`` runs.
    """

    modal: str = ""
    title: str = ""
    fields: tuple[str, ...] = ()

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        data = data or {}
        self.data: dict[str, str] = {name: str(data.get(name) or "").strip() for name in self.fields}
        for name, value in self.defaults().items():
            if not self.data.get(name):
                self.data[name] = value
        self.error: Optional[str] = None

    def defaults(self) -> dict[str, str]:
        return {}

    def date_value(self, name: str, label: str) -> Optional[date]:
        raw = self.data.get(name, "")
        if not raw:
            return None
        try:
            return parse_iso_date(raw)
        except ValueError:
            raise ValidationError(f"{label} is not a valid date (YYYY-MM-DD)")

    @abstractmethod
    def save(self, *, actor: SessionUser) -> int:
        raise NotImplementedError

    def submit(self, *, actor: SessionUser, on_success: Callable[[int], None]) -> bool:
        try:
            record_id = self.save(actor=actor)
        except (ValidationError, AuthorizationError, DataAccessError) as exc:
            self.error = str(exc)
            return False

        on_success(record_id)
        return True
