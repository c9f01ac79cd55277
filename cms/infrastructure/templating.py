from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..core.config import Config


PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATE_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.auto_reload = Config.is_development()


def render(request: Request, template_name: str, vm, status_code: int = 200):
    """Render ``template_name`` with the view-model's dict as context."""
    return templates.TemplateResponse(request, template_name, vm.to_dict(), status_code=status_code)
