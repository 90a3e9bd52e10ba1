from latency_stats.cli import app

app()
