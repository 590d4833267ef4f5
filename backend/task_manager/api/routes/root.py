"""Root Route — welcome message at GET /."""

import logging

from fastapi import APIRouter

from task_manager.api.responses import send_success

logger = logging.getLogger(__name__)
router = APIRouter(tags=["root"])


@router.get("/")
async def root():
    logger.info("Accessed the root route.")
    return send_success(None, "Welcome to the Task Manager API")
