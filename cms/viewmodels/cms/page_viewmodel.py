from typing import Any, Dict, Optional

from fastapi import Request

from ...core.validation import normalize_url
from ...services import cms_service
from ..shared.viewmodel_base import ViewModelBase


class PageViewModel(ViewModelBase):
    """Resolves a site path to either a redirect or a page."""

    def __init__(self, request: Request, full_url: str):
        super().__init__(request, full_url=full_url)

        self.url: str = normalize_url(full_url)
        self.redirect: Optional[Dict[str, Any]] = cms_service.get_redirect(self.url)
        self.redirect_url: Optional[str] = self.redirect.get('url') if self.redirect else None

        self.page: Optional[Dict[str, Any]] = None
        self.html: Optional[str] = None
        if not self.redirect:
            self.page = cms_service.get_page(self.url)
            if self.page:
                self.html = cms_service.render_markdown(self.page.get('contents'))

    @property
    def title(self) -> Optional[str]:
        return self.page.get('title') if self.page else None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['title'] = self.title
        return data
