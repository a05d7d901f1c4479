from .base import BaseForm
from .employee import AddEmployeeForm
from .leave import LEAVE_TYPES, LeaveRequestForm
from .report import WorkReportForm
from .task import AssignTaskForm

FORMS_BY_MODAL = {
    form_cls.modal: form_cls
    for form_cls in (LeaveRequestForm, WorkReportForm, AddEmployeeForm, AssignTaskForm)
}

__all__ = [
    "AddEmployeeForm",
    "AssignTaskForm",
    "BaseForm",
    "FORMS_BY_MODAL",
    "LEAVE_TYPES",
    "LeaveRequestForm",
    "WorkReportForm",
]
