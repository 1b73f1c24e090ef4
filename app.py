"""Development entrypoint: ``python app.py`` or ``flask --app app run``."""

from src.file_tracker.file_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
