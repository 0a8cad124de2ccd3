from pathlib import Path

from tandem_analyzer.ui.dash_app import build_app_config
from tandem_analyzer.services.demo_data import seed_demo_datasets

config_root = Path("config")

# build_app_config already seeds when global.json says so; this also covers seed_demo_data=false
ctx = build_app_config(config_root)
store = ctx.dataset_store

inserted = seed_demo_datasets(store)
print("storage:", store.storage_type.value, "key:", store.storage_key)
print("inserted:", inserted)

for record in store:
    print(f"  {record.id}  {record.name:32s} {record.file_size:>8s}  {record.record_count:>6,d}  {record.date_range}")
