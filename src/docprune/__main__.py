from docprune.cli import app

app()
