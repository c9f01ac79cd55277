from fastapi import Request

from ..shared.viewmodel_base import ViewModelBase


class IndexViewModel(ViewModelBase):
    def __init__(self, request: Request):
        super().__init__(request)
