from typing import Any, Dict, Optional

from fastapi import Request

from ...infrastructure import cookie_auth, request_dict
from ...infrastructure.multidict import MultiDict
from ...services import user_service


class ViewModelBase:
    """Per-request state shared by every page: inputs, user and error.

    The logged-in user is looked up at most once, on first access of
    :attr:`user`, and only when the auth cookie carried a valid user id.
    """

    def __init__(self, request: Request, form: Optional[MultiDict] = None, **route_args):
        self.request: Request = request
        self.form: MultiDict = form if form is not None else MultiDict()
        self.request_dict = request_dict.create(request, self.form, default_val='', **route_args)

        self.error: Optional[str] = None
        self.user_id: Optional[int] = cookie_auth.get_user_id_via_auth_cookie(request)

        self._user: Optional[Dict[str, Any]] = None
        self._user_set: bool = False

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        if self._user or self._user_set:
            return self._user

        self._user_set = True

        if not self.user_id:
            return None

        self._user = user_service.public_profile(user_service.find_user_by_id(self.user_id))
        return self._user

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.get('is_admin'))

    def to_dict(self) -> Dict[str, Any]:
        """Template context: public attributes plus the resolved user."""
        data = {k: v for k, v in self.__dict__.items() if not k.startswith('_')}
        data['user'] = self.user
        data['is_admin'] = self.is_admin

        return data
