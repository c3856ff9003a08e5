"""Health check and config endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from pitchcraft.api.deps import SettingsDep
from pitchcraft.api.schemas import ConfigCheckResponse, HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version="0.1.0")


@router.get("/config/check", response_model=ConfigCheckResponse)
def config_check(
    settings: SettingsDep,
) -> ConfigCheckResponse:
    return ConfigCheckResponse(
        configured={
            "anthropic": bool(settings.anthropic_api_key),
            "brave": bool(settings.brave_api_key),
        }
    )
