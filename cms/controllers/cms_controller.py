import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from ..infrastructure.templating import render
from ..services import cms_service
from ..viewmodels.cms.page_viewmodel import PageViewModel


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{full_url:path}")
async def cms_request(request: Request, full_url: str):
    """Serve whatever the CMS has at ``full_url``: a redirect, a page, or a 404."""
    vm = PageViewModel(request, full_url)

    if vm.redirect:
        try:
            cms_service.record_redirect_click(vm.redirect)
        except HTTPException as e:
            logger.warning(f"Failed to record click for redirect /{vm.url}: {e.detail}")
        return RedirectResponse(vm.redirect_url, status_code=302)

    if not vm.page:
        logger.info(f"No CMS entry for /{vm.url}")
        return render(request, "cms/not_found.html", vm, status_code=404)

    return render(request, "cms/page.html", vm)
