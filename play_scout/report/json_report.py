# play_scout/report/json_report.py

"""
JSON output of scraped records.

Dataclass records (AppSummary / AppDetail) are converted through ``to_dict``;
lists and id-keyed mappings of records are converted element-wise.
"""
import json
from pathlib import Path
from typing import Any


def to_jsonable(data: Any) -> Any:
    """Recursively replace records with plain dicts."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return data


def dumps(data: Any, *, pretty: bool = False) -> str:
    return json.dumps(to_jsonable(data), ensure_ascii=False, indent=2 if pretty else None)


def render_json(data: Any, output_path: Path | str) -> Path:
    """
    Save *data* as JSON at *output_path* and return the path.

    Example:
    ```python
    from play_scout.report.json_report import render_json
    report_path = render_json(apps, 'reports/topgrossing.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        f.write(dumps(data, pretty=True))

    return output
