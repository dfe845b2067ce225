"""Development entry point: `python app.py`."""

from src.hr_pipeline.hr_pipeline.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
