# -*- coding: utf-8 -*-
from fastapi import APIRouter

from .apis import router as apis_router
from .models import router as models_router

router = APIRouter()

router.include_router(apis_router)
router.include_router(models_router)

__all__ = ["router"]
