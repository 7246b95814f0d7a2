import os
from pathlib import Path
from typing import Optional

from flask import Flask, redirect, render_template, request, url_for
from flask_login import LoginManager, UserMixin, login_required, login_user, logout_user
from loguru import logger

from shared_modules.config import DEFAULT_CONFIG_PATH, Config
from shared_modules.locks import LockTimeoutError
from shared_modules.utils import first_of_month
from time_sheets.modules.errors import DuplicateSheetError, MissingOverviewSheetError
from time_sheets.modules.holiday_calendar import HolidayCalendar, holiday_calendar_from_config
from time_sheets.modules.new_month_processor import NewMonthProcessor

# Menü, das beim Öffnen jeder Seite eingeblendet wird: (Beschriftung, Endpoint)
MENU_TITLE = "Timeplan"
MENU_ITEMS = [("Add New Month", "new_month")]


class User(UserMixin):
    def __init__(self, id):
        self.id = id


def create_app(config: Config, holiday_calendar: Optional[HolidayCalendar] = None) -> Flask:
    """
    Erzeugt die Weboberfläche: Anmeldung, Menü und Datumsauswahl für einen neuen Monat.
    Ohne holiday_calendar wird die Feiertagsquelle aus der Config gebaut.
    """
    app = Flask(__name__)
    # Secret Key sicher aus Umgebungsvariable oder .env laden
    app.secret_key = config.secret("FLASK_SECRET_KEY", "unsicherer_fallback")

    calendar = holiday_calendar if holiday_calendar is not None else holiday_calendar_from_config(config)
    processor = NewMonthProcessor(config, calendar)

    login_manager = LoginManager()
    login_manager.login_view = "login"
    login_manager.init_app(app)

    valid_user = config.secret("APP_USER", "timeplan")

    @login_manager.user_loader
    def load_user(user_id):
        if user_id == valid_user:
            return User(user_id)
        return None

    @app.context_processor
    def register_menu():
        return {"menu_title": MENU_TITLE, "menu_items": MENU_ITEMS}

    @app.route("/", methods=["GET", "POST"])
    def login():
        if request.method == "POST":
            username = request.form["username"]
            password = request.form["password"]
            # Passwort aus Umgebungsvariable/.env
            valid_password = config.secret("APP_PASSWORD", "test")
            if username == valid_user and password == valid_password:
                login_user(User(username))
                return redirect(url_for("menu"))
            logger.warning(f"Fehlgeschlagene Anmeldung für '{username}'.")
            return render_template("login.html", error="Falsche Zugangsdaten!")
        return render_template("login.html")

    @app.route("/menu")
    @login_required
    def menu():
        return render_template("menu.html")

    @app.route("/logout")
    @login_required
    def logout():
        logout_user()
        return redirect(url_for("login"))

    @app.route("/new-month", methods=["GET", "POST"])
    @login_required
    def new_month():
        if request.method == "POST":
            month = request.form.get("month", "").strip()
            if not month:
                return render_template("date_picker.html", error="Bitte einen Monat wählen."), 400
            try:
                first_of_month(month)
            except ValueError as exc:
                return render_template("date_picker.html", error=str(exc)), 400
            try:
                summary = processor.submit(month)
            except (MissingOverviewSheetError, DuplicateSheetError) as exc:
                return render_template("date_picker.html", error=str(exc)), 409
            except LockTimeoutError as exc:
                return render_template("date_picker.html", error=str(exc)), 503
            except RuntimeError as exc:
                # Mappe nicht lesbar oder nicht speicherbar
                logger.error(f"Monatsblatt nicht angelegt: {exc}")
                return render_template("date_picker.html", error=str(exc)), 500
            return render_template("success.html", msg=f"Monatsblatt '{summary.sheet_name}' wurde angelegt.")
        return render_template("date_picker.html")

    return app


def main() -> None:
    config_path = Path(os.getenv("TIMEPLAN_CONFIG", str(DEFAULT_CONFIG_PATH)))
    app = create_app(Config(config_path))
    app.run(debug=os.getenv("FLASK_DEBUG") == "1")


if __name__ == "__main__":
    main()
