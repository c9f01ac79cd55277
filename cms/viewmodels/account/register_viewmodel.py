from typing import Optional

from fastapi import Request

from ...core.validation import EMAIL_PATTERN, MIN_PASSWORD_LENGTH
from ...infrastructure.multidict import MultiDict
from ...services import user_service
from ..shared.viewmodel_base import ViewModelBase


class RegisterViewModel(ViewModelBase):
    def __init__(self, request: Request, form: Optional[MultiDict] = None):
        super().__init__(request, form)

        self.name: str = self.request_dict.name.strip()
        self.email: str = self.request_dict.email.lower().strip()
        self.password: str = self.request_dict.password

    def validate(self) -> None:
        if not self.name:
            self.error = 'You must specify a name.'
        elif not self.email:
            self.error = 'You must specify an email.'
        elif not EMAIL_PATTERN.match(self.email):
            self.error = 'That does not look like an email address.'
        elif not self.password:
            self.error = 'You must specify a password.'
        elif len(self.password) < MIN_PASSWORD_LENGTH:
            self.error = f'The password must be at least {MIN_PASSWORD_LENGTH} characters.'
        elif user_service.find_user_by_email(self.email):
            self.error = 'A user with that email address already exists.'
