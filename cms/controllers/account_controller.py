import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from ..infrastructure import cookie_auth
from ..infrastructure.request_dict import read_form
from ..infrastructure.templating import render
from ..services import user_service
from ..viewmodels.account.index_viewmodel import IndexViewModel
from ..viewmodels.account.login_viewmodel import LoginViewModel
from ..viewmodels.account.register_viewmodel import RegisterViewModel


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account")


@router.get("")
async def index(request: Request):
    vm = IndexViewModel(request)
    if not vm.user:
        return RedirectResponse("/account/login", status_code=302)

    return render(request, "account/index.html", vm)


@router.get("/register")
async def register_get(request: Request):
    vm = RegisterViewModel(request)
    return render(request, "account/register.html", vm)


@router.post("/register")
async def register_post(request: Request):
    form = await read_form(request)
    vm = RegisterViewModel(request, form)

    vm.validate()
    if vm.error:
        return render(request, "account/register.html", vm)

    try:
        user = user_service.create_user(vm.name, vm.email, vm.password)
    except HTTPException as e:
        if e.status_code >= 500:
            raise
        vm.error = e.detail
        return render(request, "account/register.html", vm)

    logger.info(f"Registered user {user['id']}")
    response = RedirectResponse("/account", status_code=302)
    cookie_auth.set_auth(response, user['id'])
    return response


@router.get("/login")
async def login_get(request: Request):
    vm = LoginViewModel(request)
    return render(request, "account/login.html", vm)


@router.post("/login")
async def login_post(request: Request):
    form = await read_form(request)
    vm = LoginViewModel(request, form)

    vm.validate()
    if vm.error:
        return render(request, "account/login.html", vm)

    user = user_service.login_user(vm.email, vm.password)
    if not user:
        vm.error = "The account does not exist or the password is wrong."
        return render(request, "account/login.html", vm)

    response = RedirectResponse("/account", status_code=302)
    cookie_auth.set_auth(response, user['id'])
    return response


@router.get("/logout")
async def logout(request: Request):
    response = RedirectResponse("/", status_code=302)
    cookie_auth.logout(response)
    return response
