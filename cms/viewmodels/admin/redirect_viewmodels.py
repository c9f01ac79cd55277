from typing import Any, Dict, List, Optional

from fastapi import Request

from ...core.validation import URL_PATH_PATTERN, normalize_url
from ...infrastructure.multidict import MultiDict
from ...services import cms_service
from ..shared.viewmodel_base import ViewModelBase


class RedirectListViewModel(ViewModelBase):
    def __init__(self, request: Request):
        super().__init__(request)
        self.redirects: List[Dict[str, Any]] = []

    def load(self) -> None:
        self.redirects = cms_service.all_redirects()


class EditRedirectViewModel(ViewModelBase):
    def __init__(self, request: Request, redirect_id: Optional[int] = None, form: Optional[MultiDict] = None):
        super().__init__(request, form)
        self._submitted = form is not None

        self.redirect_id = redirect_id
        self.redirect: Optional[Dict[str, Any]] = None

        self.short_url: str = normalize_url(self.request_dict.short_url)
        self.url: str = self.request_dict.url.strip()
        self.name: str = self.request_dict.name.strip()

    def load(self) -> None:
        if not self.redirect_id:
            return

        self.redirect = cms_service.find_redirect_by_id(self.redirect_id)
        if self.redirect and not self._submitted:
            self.short_url = self.redirect.get('short_url', '')
            self.url = self.redirect.get('url', '')
            self.name = self.redirect.get('name', '')

    @property
    def is_new(self) -> bool:
        return self.redirect_id is None

    def validate(self) -> None:
        if not self.short_url:
            self.error = 'You must specify a short URL.'
        elif not URL_PATH_PATTERN.match(self.short_url) or '..' in self.short_url:
            self.error = 'The short URL may only contain letters, digits, "-", "_", "." and "/".'
        elif not self.url:
            self.error = 'You must specify a target URL.'
        elif self.redirect_id and not self.redirect:
            self.error = f'No redirect with id {self.redirect_id}.'

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['is_new'] = self.is_new
        return data
