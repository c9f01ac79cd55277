from typing import Any, Optional

from fastapi import Request

from .multidict import MultiDict


class RequestDictionary(dict):
    """Flat view of a request's inputs with attribute access.

    Missing attributes resolve to ``default_val`` instead of raising.
    """

    def __init__(self, *args, default_val: Any = None, **kwargs):
        self.default_val = default_val
        super().__init__(*args, **kwargs)

    def __getattr__(self, key: str) -> Any:
        if key.startswith('__'):
            raise AttributeError(key)
        return self.get(key, self.default_val)


def query_args(request: Request) -> MultiDict:
    return MultiDict(request.query_params.multi_items())


async def read_form(request: Request) -> MultiDict:
    form = await request.form()
    return MultiDict(form.multi_items())


def create(request: Request, form: Optional[MultiDict] = None, default_val: Any = '', **route_args) -> RequestDictionary:
    """Merge query args, headers, form fields and route arguments, later ones winning."""
    args = query_args(request).to_dict()
    headers = dict(request.headers)
    form_data = {}
    if form is not None:
        # Multipart file parts are not form text
        form_data = {k: v if isinstance(v, str) else '' for k, v in form.to_dict().items()}

    data = {
        **args,
        **headers,
        **form_data,
        **request.path_params,
        **route_args,
    }

    return RequestDictionary(data, default_val=default_val)
