from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cardview.api.router import create_app
from cardview.utils.constants import DARK_THEME_COLORS, LIGHT_THEME_COLORS


@pytest.fixture
def client(settings_store) -> TestClient:
    app = create_app(settings_store=settings_store)
    return TestClient(app)


def test_project_rows_returns_formatted_rows(client: TestClient, source_data, column_info, selected_columns) -> None:
    response = client.post(
        "/api/cards/rows",
        json={
            "sourceData": source_data,
            "columnInfo": column_info,
            "selectedColumns": selected_columns,
            "timezone": "UTC",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["rowCount"] == 4
    assert body["rows"][0] == {
        "Name": "Bob",
        "Age": 40,
        "Revenue": "1,234.50",
        "Joined": "Nov 14, 10:13 PM",
    }


def test_project_rows_with_empty_selection(client: TestClient, source_data, column_info) -> None:
    response = client.post(
        "/api/cards/rows",
        json={"sourceData": source_data, "columnInfo": column_info, "selectedColumns": []},
    )

    assert response.status_code == 200
    assert response.json() == {"rows": [], "rowCount": 0}


def test_project_rows_rejects_unknown_timezone(client: TestClient) -> None:
    response = client.post(
        "/api/cards/rows",
        json={"sourceData": {}, "columnInfo": {}, "selectedColumns": [], "timezone": "Nowhere/Else"},
    )

    assert response.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"sourceData": []},
        {"sourceData": {"a": "oops"}, "columnInfo": {"a": {"name": "A"}}, "selectedColumns": ["a"]},
        {"sourceData": {"a": [1, 2]}, "columnInfo": {"a": {"name": "A"}}},
        {"sourceData": {"a": [1, 2]}, "columnInfo": {"a": {"name": "A"}}, "selectedColumns": "a"},
        {},
    ],
)
def test_project_rows_degrades_malformed_bodies_to_no_rows(client: TestClient, body: dict) -> None:
    response = client.post("/api/cards/rows", json=body)

    assert response.status_code == 200
    assert response.json() == {"rows": [], "rowCount": 0}


def test_resolve_theme_returns_colors_and_css(client: TestClient) -> None:
    response = client.post("/api/theme/resolve", json={"theme": "dark"})

    assert response.status_code == 200
    body = response.json()
    assert body["colors"] == DARK_THEME_COLORS
    assert body["css"].startswith(":root {")
    assert "--background: 240 10% 3.9%;" in body["css"]


def test_resolve_empty_custom_theme_falls_back_to_light(client: TestClient) -> None:
    response = client.post("/api/theme/resolve", json={"theme": "custom", "customColors": {}})

    assert response.json()["colors"] == LIGHT_THEME_COLORS


def test_color_conversions(client: TestClient) -> None:
    assert client.post("/api/colors/hsl", json={"hex": "#ff0000"}).json() == {"hsl": "0 100% 50%"}
    assert client.post("/api/colors/hex", json={"hsl": "0 100% 50%"}).json() == {"hex": "#ff0000"}
    assert client.post("/api/colors/hex", json={"hsl": "garbage"}).json() == {"hex": "#000000"}
    assert client.post("/api/colors/hex", json={}).json() == {"hex": "#000000"}


def test_widget_settings_default_then_saved(client: TestClient) -> None:
    initial = client.get("/api/widgets/w-1/settings")
    assert initial.status_code == 200
    assert initial.json()["settings"]["styling"]["theme"] == "light"
    assert initial.json()["cardSettings"]["cardHeight"] == "400px"

    saved = client.put(
        "/api/widgets/w-1/settings",
        json={
            "settings": {"title": "Ops", "textColor": 5, "styling": {"theme": "dark"}},
            "cardSettings": {"Title": "Team", "Card Height": "500px", "Show Header": False},
        },
    )
    assert saved.status_code == 200
    body = saved.json()
    assert body["widgetId"] == "w-1"
    assert body["settings"]["title"] == "Ops"
    assert body["settings"]["textColor"] == "#000000"
    assert body["cardSettings"]["showHeader"] is False

    reloaded = client.get("/api/widgets/w-1/settings").json()
    assert reloaded["settings"]["styling"]["theme"] == "dark"
    assert reloaded["cardSettings"]["title"] == "Team"
    assert reloaded["cardSettings"]["cardHeight"] == "500px"


def test_partial_update_keeps_stored_card_settings(client: TestClient) -> None:
    client.put("/api/widgets/w-2/settings", json={"cardSettings": {"Title": "Kept"}})

    response = client.put("/api/widgets/w-2/settings", json={"settings": {"title": "Only settings"}})

    assert response.json()["cardSettings"]["title"] == "Kept"
    assert response.json()["settings"]["title"] == "Only settings"


def test_resolve_unknown_theme_mode_uses_light(client: TestClient) -> None:
    response = client.post("/api/theme/resolve", json={"theme": "sepia"})

    assert response.status_code == 200
    assert response.json()["colors"] == LIGHT_THEME_COLORS
