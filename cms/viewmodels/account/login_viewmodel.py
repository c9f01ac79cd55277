from typing import Optional

from fastapi import Request

from ...infrastructure.multidict import MultiDict
from ..shared.viewmodel_base import ViewModelBase


class LoginViewModel(ViewModelBase):
    def __init__(self, request: Request, form: Optional[MultiDict] = None):
        super().__init__(request, form)

        self.email: str = self.request_dict.email.lower().strip()
        self.password: str = self.request_dict.password

    def validate(self) -> None:
        if not self.email:
            self.error = 'You must specify an email.'
        elif not self.password:
            self.error = 'You must specify a password.'
