import sys
from pathlib import Path

from tandem_analyzer.analysis.pipeline import run_pipeline
from tandem_analyzer.logging_config import configure_logging
from tandem_analyzer.ui.dash_app import build_app_config

configure_logging(force_format="plain")

ctx = build_app_config(Path("config"))
store = ctx.dataset_store

# Analyse the current selection, or everything if nothing is selected
records = store.selected() or store.records
if not records:
    print("No datasets stored. Run scripts/seed_demo_data.py first.")
    sys.exit(1)


def show(progress):
    print(f"\r{progress.stage.label:18s} {progress.percent:5.1f}%  {progress.status:14s}", end="")
    if progress.fraction >= 1.0:
        print()


result = run_pipeline(ctx.analysis_engine, records, ctx.schedule, on_progress=show)

stats = result.summary_stats
print("\nDate range:   ", stats.date_range)
print("Records:      ", f"{stats.total_records:,}")
print("Avg glucose:  ", stats.avg_glucose)
print("Time in range:", stats.time_in_range)
print("\nInsights:")
for item in result.insights:
    print("  -", item)
print("\nRecommendations:")
for item in result.recommendations:
    print("  -", item)
