import pytest
from openpyxl import Workbook, load_workbook

from gui.app import create_app
from time_sheets.modules.workbook_host import WorkbookHost


@pytest.fixture
def client(config, empty_calendar, monkeypatch):
    for name in ("APP_USER", "APP_PASSWORD", "APP_USER_ENC", "APP_PASSWORD_ENC", "FLASK_SECRET_KEY_ENC"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FLASK_SECRET_KEY", "test-secret")
    app = create_app(config, holiday_calendar=empty_calendar)
    app.config["TESTING"] = True
    return app.test_client()


def _login(client):
    return client.post("/", data={"username": "timeplan", "password": "test"})


def test_menu_requires_login(client):
    response = client.get("/menu")
    assert response.status_code == 302


def test_wrong_password(client):
    response = client.post("/", data={"username": "timeplan", "password": "falsch"})
    assert response.status_code == 200
    assert "Falsche Zugangsdaten" in response.get_data(as_text=True)


def test_menu_lists_add_new_month(client):
    assert _login(client).status_code == 302
    page = client.get("/menu").get_data(as_text=True)
    assert "Timeplan" in page
    assert "Add New Month" in page
    assert "/new-month" in page


def test_date_picker_creates_sheet(client, config):
    WorkbookHost.create(config.workbook_path, "Overview")
    _login(client)

    assert "Please pick the month" in client.get("/new-month").get_data(as_text=True)

    response = client.post("/new-month", data={"month": "2024-02"})
    assert response.status_code == 200
    assert "February 2024" in response.get_data(as_text=True)
    assert load_workbook(config.workbook_path).sheetnames == ["Overview", "February 2024"]


def test_date_picker_rejects_bad_input(client, config):
    WorkbookHost.create(config.workbook_path, "Overview")
    _login(client)

    assert client.post("/new-month", data={"month": ""}).status_code == 400
    assert client.post("/new-month", data={"month": "morgen"}).status_code == 400
    assert load_workbook(config.workbook_path).sheetnames == ["Overview"]


def test_missing_overview_is_shown(client, config):
    Workbook().save(config.workbook_path)
    _login(client)

    response = client.post("/new-month", data={"month": "2024-02"})
    assert response.status_code == 409
    assert "main-sheet named" in response.get_data(as_text=True)


def test_same_month_twice_is_shown(client, config):
    WorkbookHost.create(config.workbook_path, "Overview")
    _login(client)

    assert client.post("/new-month", data={"month": "2024-02"}).status_code == 200
    response = client.post("/new-month", data={"month": "2024-02"})
    assert response.status_code == 409
    assert "existiert bereits" in response.get_data(as_text=True)
    assert load_workbook(config.workbook_path).sheetnames == ["Overview", "February 2024"]


def test_missing_workbook_is_shown(client, config):
    _login(client)

    response = client.post("/new-month", data={"month": "2024-02"})
    assert response.status_code == 500
    assert "Fehler beim Laden" in response.get_data(as_text=True)
