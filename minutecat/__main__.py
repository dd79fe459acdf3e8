from minutecat.cli.main import app

app()
