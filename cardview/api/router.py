from __future__ import annotations

from datetime import tzinfo
from typing import Annotated, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from cardview.models.settings import CardSettings, PluginSettings
from cardview.services.plugin_settings import (
    SettingsStore,
    load_card_settings,
    merge_plugin_settings,
    merge_theme_selection,
)
from cardview.services.row_projection import RowProjector
from cardview.services.theme_colors import (
    InMemoryStyleSink,
    ThemeApplier,
    hex_to_hsl_triple,
    hsl_triple_to_hex,
)
from cardview.utils.config import load_display_config
from cardview.utils.logging import get_logger, log_event

LOGGER = get_logger(__name__)


class ProjectRowsRequest(BaseModel):
    source_data: Annotated[Any | None, Field(alias="sourceData")] = None
    column_info: Annotated[Any | None, Field(alias="columnInfo")] = None
    selected_columns: Annotated[Any | None, Field(alias="selectedColumns")] = None
    timezone: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class ProjectRowsResponse(BaseModel):
    rows: list[dict[str, Any]]
    row_count: Annotated[int, Field(alias="rowCount")]

    model_config = ConfigDict(populate_by_name=True)


class ResolvedThemeResponse(BaseModel):
    colors: dict[str, str]
    css: str


class HexColorRequest(BaseModel):
    hex: str


class HslColorResponse(BaseModel):
    hsl: str


class HslColorRequest(BaseModel):
    hsl: str | None = None


class HexColorResponse(BaseModel):
    hex: str


class WidgetSettingsRequest(BaseModel):
    settings: dict[str, Any] | None = None
    card_settings: Annotated[dict[str, Any] | None, Field(alias="cardSettings")] = None

    model_config = ConfigDict(populate_by_name=True)


class WidgetSettingsResponse(BaseModel):
    widget_id: Annotated[str, Field(alias="widgetId")]
    settings: PluginSettings
    card_settings: Annotated[CardSettings, Field(alias="cardSettings")]

    model_config = ConfigDict(populate_by_name=True)


def get_settings_store() -> SettingsStore:
    return SettingsStore()


def _resolve_timezone(name: str | None) -> tzinfo | None:
    if not name:
        return load_display_config().timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {name}") from error


def create_app(*, settings_store: SettingsStore | None = None) -> FastAPI:
    """Create a FastAPI instance exposing row projection, theme and settings endpoints."""
    app = FastAPI(
        title="Card Display API",
        version="0.1.0",
    )

    if settings_store is not None:
        app.dependency_overrides[get_settings_store] = lambda: settings_store

    @app.post("/api/cards/rows", response_model=ProjectRowsResponse, response_model_by_alias=True)
    def project_card_rows(payload: ProjectRowsRequest) -> ProjectRowsResponse:
        projector = RowProjector(tz=_resolve_timezone(payload.timezone))
        rows = projector.project(payload.source_data, payload.column_info, payload.selected_columns)
        return ProjectRowsResponse(rows=rows, row_count=len(rows))

    @app.post("/api/theme/resolve", response_model=ResolvedThemeResponse)
    def resolve_theme(payload: dict[str, Any]) -> ResolvedThemeResponse:
        sink = InMemoryStyleSink()
        colors = ThemeApplier(sink, logger=LOGGER).apply_selection(merge_theme_selection(payload))
        return ResolvedThemeResponse(colors=colors, css=sink.to_css())

    @app.post("/api/colors/hsl", response_model=HslColorResponse)
    def convert_hex(payload: HexColorRequest) -> HslColorResponse:
        return HslColorResponse(hsl=hex_to_hsl_triple(payload.hex))

    @app.post("/api/colors/hex", response_model=HexColorResponse)
    def convert_hsl(payload: HslColorRequest) -> HexColorResponse:
        return HexColorResponse(hex=hsl_triple_to_hex(payload.hsl))

    @app.get(
        "/api/widgets/{widget_id}/settings",
        response_model=WidgetSettingsResponse,
        response_model_by_alias=True,
    )
    def load_widget_settings(
        widget_id: str,
        store: Annotated[SettingsStore, Depends(get_settings_store)],
    ) -> WidgetSettingsResponse:
        display = load_display_config()
        return WidgetSettingsResponse(
            widget_id=widget_id,
            settings=store.load(widget_id),
            card_settings=store.load_card_settings(
                widget_id, default_card_height=display.default_card_height
            ),
        )

    @app.put(
        "/api/widgets/{widget_id}/settings",
        response_model=WidgetSettingsResponse,
        response_model_by_alias=True,
    )
    def save_widget_settings(
        widget_id: str,
        payload: WidgetSettingsRequest,
        store: Annotated[SettingsStore, Depends(get_settings_store)],
    ) -> WidgetSettingsResponse:
        display = load_display_config()
        settings = (
            merge_plugin_settings(payload.settings)
            if payload.settings is not None
            else store.load(widget_id)
        )
        card_settings = (
            load_card_settings(payload.card_settings, default_card_height=display.default_card_height)
            if payload.card_settings is not None
            else store.load_card_settings(widget_id, default_card_height=display.default_card_height)
        )
        try:
            store.save(widget_id, settings)
            store.save_card_settings(widget_id, card_settings)
        except OSError as error:
            LOGGER.exception("Failed to persist settings for %s", widget_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to save settings",
            ) from error
        log_event(LOGGER, "settings.api.save", widget_id=widget_id)
        return WidgetSettingsResponse(widget_id=widget_id, settings=settings, card_settings=card_settings)

    return app
