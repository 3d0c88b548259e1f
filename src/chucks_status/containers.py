"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from chucks_status.adapters.asyncio_notification_center import (
    AsyncioNotificationCenter,
)
from chucks_status.adapters.chucks_client import ChucksClient, HttpxChucksClient
from chucks_status.adapters.file_menu_cache_store import FileMenuCacheStore
from chucks_status.adapters.json_favorites_repository import JsonFavoritesRepository
from chucks_status.app_logging import configure_logging
from chucks_status.config import Settings
from chucks_status.services.cache import InMemoryMenuCacheStore
from chucks_status.services.favorites import FavoritesService
from chucks_status.services.menu import MenuService
from chucks_status.services.notifications import (
    FAVORITES_TAG,
    NotificationCenter,
    NotificationScheduler,
)
from chucks_status.services.refresh import RefreshService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    chucks_client: ChucksClient
    menu_service: MenuService
    favorites_service: FavoritesService
    notification_center: NotificationCenter
    notification_scheduler: NotificationScheduler
    refresh_service: RefreshService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    notification_center: NotificationCenter | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    chucks_client = HttpxChucksClient.create(
        base_url=resolved_settings.chucks_api_base_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    menu_service = MenuService(
        client=chucks_client,
        memory=InMemoryMenuCacheStore(),
        persistent=FileMenuCacheStore(resolved_settings.resolved_cache_dir),
        days=resolved_settings.menu_days,
        expiration=resolved_settings.cache_expiration,
        retry_attempts=resolved_settings.fetch_retry_attempts,
    )
    favorites_service = FavoritesService(
        JsonFavoritesRepository(resolved_settings.resolved_favorites_path)
    )
    resolved_center = notification_center or AsyncioNotificationCenter()
    notification_scheduler = NotificationScheduler(center=resolved_center)
    refresh_service = RefreshService(
        menu_service=menu_service,
        favorites_service=favorites_service,
        notification_scheduler=notification_scheduler,
    )

    async def close_resources() -> None:
        resolved_center.cancel_all(FAVORITES_TAG)
        await chucks_client.close()

    return AppContainer(
        settings=resolved_settings,
        chucks_client=chucks_client,
        menu_service=menu_service,
        favorites_service=favorites_service,
        notification_center=resolved_center,
        notification_scheduler=notification_scheduler,
        refresh_service=refresh_service,
        close_resources=close_resources,
    )
