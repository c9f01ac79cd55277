import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from ..infrastructure.request_dict import read_form
from ..infrastructure.templating import render
from ..services import cms_service
from ..viewmodels.admin.page_viewmodels import EditPageViewModel, PageListViewModel
from ..viewmodels.admin.redirect_viewmodels import EditRedirectViewModel, RedirectListViewModel
from ..viewmodels.shared.viewmodel_base import ViewModelBase


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


def _check_access(vm: ViewModelBase) -> Optional[RedirectResponse]:
    """Login redirect for anonymous visitors; 403 for users who are not admins."""
    if not vm.user:
        return RedirectResponse("/account/login", status_code=302)
    if not vm.is_admin:
        logger.warning(f"User {vm.user_id} denied access to {vm.request.url.path}")
        raise HTTPException(status_code=403, detail="Admin access required")
    return None


@router.get("")
async def index(request: Request):
    return RedirectResponse("/admin/pages", status_code=302)


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

@router.get("/pages")
async def pages(request: Request):
    vm = PageListViewModel(request)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    return render(request, "admin/pages.html", vm)


@router.get("/add_page")
async def add_page_get(request: Request):
    vm = EditPageViewModel(request)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    return render(request, "admin/edit_page.html", vm)


@router.post("/add_page")
async def add_page_post(request: Request):
    form = await read_form(request)
    vm = EditPageViewModel(request, form=form)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    vm.validate()
    if vm.error:
        return render(request, "admin/edit_page.html", vm)

    try:
        cms_service.create_page(vm.url, vm.title, vm.contents, vm.is_published, user_id=vm.user_id)
    except HTTPException as e:
        if e.status_code >= 500:
            raise
        vm.error = e.detail
        return render(request, "admin/edit_page.html", vm)

    return RedirectResponse("/admin/pages", status_code=302)


@router.get("/edit_page/{page_id}")
async def edit_page_get(request: Request, page_id: int):
    vm = EditPageViewModel(request, page_id)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()
    if not vm.page:
        raise HTTPException(status_code=404, detail=f"Page not found: {page_id}")

    return render(request, "admin/edit_page.html", vm)


@router.post("/edit_page/{page_id}")
async def edit_page_post(request: Request, page_id: int):
    form = await read_form(request)
    vm = EditPageViewModel(request, page_id, form)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    vm.validate()
    if vm.error:
        return render(request, "admin/edit_page.html", vm)

    try:
        cms_service.update_page(page_id, vm.url, vm.title, vm.contents, vm.is_published)
    except HTTPException as e:
        if e.status_code >= 500:
            raise
        vm.error = e.detail
        return render(request, "admin/edit_page.html", vm)

    return RedirectResponse("/admin/pages", status_code=302)


# ---------------------------------------------------------------------------
# Redirects
# ---------------------------------------------------------------------------

@router.get("/redirects")
async def redirects(request: Request):
    vm = RedirectListViewModel(request)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    return render(request, "admin/redirects.html", vm)


@router.get("/add_redirect")
async def add_redirect_get(request: Request):
    vm = EditRedirectViewModel(request)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    return render(request, "admin/edit_redirect.html", vm)


@router.post("/add_redirect")
async def add_redirect_post(request: Request):
    form = await read_form(request)
    vm = EditRedirectViewModel(request, form=form)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    vm.validate()
    if vm.error:
        return render(request, "admin/edit_redirect.html", vm)

    try:
        cms_service.create_redirect(vm.short_url, vm.url, vm.name, user_id=vm.user_id)
    except HTTPException as e:
        if e.status_code >= 500:
            raise
        vm.error = e.detail
        return render(request, "admin/edit_redirect.html", vm)

    return RedirectResponse("/admin/redirects", status_code=302)


@router.get("/edit_redirect/{redirect_id}")
async def edit_redirect_get(request: Request, redirect_id: int):
    vm = EditRedirectViewModel(request, redirect_id)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()
    if not vm.redirect:
        raise HTTPException(status_code=404, detail=f"Redirect not found: {redirect_id}")

    return render(request, "admin/edit_redirect.html", vm)


@router.post("/edit_redirect/{redirect_id}")
async def edit_redirect_post(request: Request, redirect_id: int):
    form = await read_form(request)
    vm = EditRedirectViewModel(request, redirect_id, form)
    denied = _check_access(vm)
    if denied:
        return denied
    vm.load()

    vm.validate()
    if vm.error:
        return render(request, "admin/edit_redirect.html", vm)

    try:
        cms_service.update_redirect(redirect_id, vm.short_url, vm.url, vm.name)
    except HTTPException as e:
        if e.status_code >= 500:
            raise
        vm.error = e.detail
        return render(request, "admin/edit_redirect.html", vm)

    return RedirectResponse("/admin/redirects", status_code=302)
