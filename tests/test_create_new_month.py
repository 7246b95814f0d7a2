from openpyxl import load_workbook

from time_sheets import create_new_month


def test_init_and_month(make_config, tmp_path):
    config = make_config()
    config_path = tmp_path / "timeplan_config.yaml"

    assert create_new_month.main(["--config", str(config_path), "--init", "2024-02"]) == 0

    wb = load_workbook(config.workbook_path)
    assert wb.sheetnames == ["Overview", "February 2024"]
    assert wb["Overview"]["A1"].value == "Month"


def test_prompt_cancel(make_config, tmp_path, monkeypatch):
    make_config()
    config_path = tmp_path / "timeplan_config.yaml"
    assert create_new_month.main(["--config", str(config_path), "--init"]) == 0

    monkeypatch.setattr(create_new_month.Prompt, "ask", lambda *args, **kwargs: "")
    assert create_new_month.main(["--config", str(config_path)]) == 0

    monkeypatch.setattr(create_new_month.Prompt, "ask", lambda *args, **kwargs: "2024-06")
    assert create_new_month.main(["--config", str(config_path)]) == 0

    wb = load_workbook(tmp_path / "Arbeitszeit.xlsx")
    assert wb.sheetnames == ["Overview", "June 2024"]


def test_missing_overview_exit_code(make_config, tmp_path):
    from openpyxl import Workbook

    config = make_config()
    Workbook().save(config.workbook_path)

    assert create_new_month.main(["--config", str(tmp_path / "timeplan_config.yaml"), "2024-02"]) == 1


def test_init_refuses_existing_workbook(make_config, tmp_path, capsys):
    make_config()
    config_path = tmp_path / "timeplan_config.yaml"
    assert create_new_month.main(["--config", str(config_path), "--init"]) == 0

    assert create_new_month.main(["--config", str(config_path), "--init"]) == 1
    assert "existiert bereits" in capsys.readouterr().out


def test_missing_workbook_exit_code(make_config, tmp_path, capsys):
    make_config()

    assert create_new_month.main(["--config", str(tmp_path / "timeplan_config.yaml"), "2024-02"]) == 1
    assert "Fehler beim Laden" in capsys.readouterr().out


def test_same_month_twice_exit_code(make_config, tmp_path, capsys):
    config = make_config()
    config_path = tmp_path / "timeplan_config.yaml"
    assert create_new_month.main(["--config", str(config_path), "--init", "2024-02"]) == 0

    assert create_new_month.main(["--config", str(config_path), "2024-02"]) == 1
    assert "existiert bereits" in capsys.readouterr().out
    assert load_workbook(config.workbook_path).sheetnames == ["Overview", "February 2024"]


def test_init_basic_variant_headers(make_config, tmp_path):
    config = make_config(time_sheet={"variant": "basic"})

    assert create_new_month.main(["--config", str(tmp_path / "timeplan_config.yaml"), "--init"]) == 0

    overview = load_workbook(config.workbook_path)["Overview"]
    assert [c.value for c in overview[1]] == ["Month", "Total working time", "Target time", "Overtime"]
