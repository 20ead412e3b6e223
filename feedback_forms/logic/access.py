# feedback_forms/logic/access.py
from feedback_forms.core.errors import Forbidden
from feedback_forms.models.form import Form, FormStatus


def can_mutate(form: Form, actor_id) -> bool:
    return form.owner_id == actor_id


def can_edit_content(form: Form) -> bool:
    # Status toggles are exempt; only title/description/questions are locked.
    return (form.response_count or 0) == 0


def is_open_for_submission(form: Form) -> bool:
    return form.status == FormStatus.OPEN.value


def require_owner(form: Form, actor_id) -> None:
    if not can_mutate(form, actor_id):
        raise Forbidden("Not authorized to access this form", Forbidden.NOT_OWNER)


def require_editable_content(form: Form) -> None:
    if not can_edit_content(form):
        raise Forbidden("Cannot edit a form that already has responses.", Forbidden.CONTENT_LOCKED)


def require_open(form: Form) -> None:
    if not is_open_for_submission(form):
        raise Forbidden("This form is no longer accepting responses.", Forbidden.CLOSED)
