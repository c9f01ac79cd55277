from typing import Any, Dict, List, Optional

from fastapi import Request

from ...core.validation import URL_PATH_PATTERN, normalize_url
from ...infrastructure.multidict import MultiDict
from ...services import cms_service
from ..shared.viewmodel_base import ViewModelBase


class PageListViewModel(ViewModelBase):
    def __init__(self, request: Request):
        super().__init__(request)
        self.pages: List[Dict[str, Any]] = []

    def load(self) -> None:
        self.pages = cms_service.all_pages()


class EditPageViewModel(ViewModelBase):
    """Add (``page_id`` is None) or edit a page.

    Nothing is read from storage until :meth:`load`, which the controller
    calls once the visitor has passed the admin check. Without a form the
    fields then come from the stored page; with one they keep the
    submitted values.
    """

    def __init__(self, request: Request, page_id: Optional[int] = None, form: Optional[MultiDict] = None):
        super().__init__(request, form)
        self._submitted = form is not None

        self.page_id = page_id
        self.page: Optional[Dict[str, Any]] = None

        self.url: str = normalize_url(self.request_dict.url)
        self.title: str = self.request_dict.title.strip()
        self.contents: str = self.request_dict.contents
        self.is_published: bool = self.form.get('is_published', '') in ('on', 'true', '1')

    def load(self) -> None:
        if not self.page_id:
            return

        self.page = cms_service.find_page_by_id(self.page_id)
        if self.page and not self._submitted:
            self.url = self.page.get('url', '')
            self.title = self.page.get('title', '')
            self.contents = self.page.get('contents', '')
            self.is_published = bool(self.page.get('is_published', True))

    @property
    def is_new(self) -> bool:
        return self.page_id is None

    def validate(self) -> None:
        if not self.url:
            self.error = 'You must specify a URL.'
        elif not URL_PATH_PATTERN.match(self.url) or '..' in self.url:
            self.error = 'The URL may only contain letters, digits, "-", "_", "." and "/".'
        elif not self.title:
            self.error = 'You must specify a title.'
        elif self.page_id and not self.page:
            self.error = f'No page with id {self.page_id}.'

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['is_new'] = self.is_new
        return data
