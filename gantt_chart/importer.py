"""Excel import functionality for project tasks."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from openpyxl import load_workbook

DEFAULT_IMPORT_CONFIG = {
    "sheet_name": 0,  # 0 for first sheet, or sheet name
    "header_row": 1,  # 1-indexed row number for headers
    "column_mapping": {
        "resource": "Resource",
        "name": "Task",
        "days": "Days",
        "done": "Done",  # Optional
        "start": "Start",  # Optional
    },
    "date_format": "%Y-%m-%d",  # strptime format for dates
}

REQUIRED_FIELDS = ("resource", "name", "days")
_TRUE_WORDS = {"1", "true", "yes", "y", "x", "done"}


def load_import_config(config_path: str = "import_config.json") -> dict:
    """Load import configuration from JSON file.

    If the file doesn't exist, returns the default configuration.

    Args:
        config_path: Path to the import configuration file

    Returns:
        Dictionary with import configuration
    """
    path = Path(config_path)
    if not path.exists():
        return json.loads(json.dumps(DEFAULT_IMPORT_CONFIG))

    with open(path) as f:
        config = json.load(f)

    # Merge with defaults to ensure all required keys exist
    result = json.loads(json.dumps(DEFAULT_IMPORT_CONFIG))
    mapping = config.pop("column_mapping", {})
    result.update(config)
    result["column_mapping"].update(mapping)

    return result


def save_default_import_config(config_path: str = "import_config.json") -> None:
    """Save the default import configuration to a file."""
    with open(config_path, "w") as f:
        json.dump(DEFAULT_IMPORT_CONFIG, f, indent=2)


def _cell_date(value, date_format: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return datetime.strptime(str(value).strip(), date_format).date().isoformat()


def _cell_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_WORDS


def read_excel_tasks(excel_path: str, config: Optional[dict] = None) -> list[dict]:
    """Read task rows from an Excel file.

    Args:
        excel_path: Path to the Excel file
        config: Import configuration (uses default if not provided)

    Returns:
        List of row dictionaries with resource, name, days and optional
        done/start keys

    Raises:
        FileNotFoundError: If Excel file doesn't exist
        ValueError: If required columns are missing or data is invalid
    """
    if config is None:
        config = DEFAULT_IMPORT_CONFIG

    path = Path(excel_path)
    if not path.exists():
        raise FileNotFoundError(f"Excel file not found: {excel_path}")

    wb = load_workbook(filename=excel_path, data_only=True)

    sheet_name = config.get("sheet_name", 0)
    if isinstance(sheet_name, int):
        sheet = wb.worksheets[sheet_name]
    else:
        sheet = wb[sheet_name]

    header_row_num = config.get("header_row", 1)
    header_row = list(sheet.iter_rows(min_row=header_row_num, max_row=header_row_num))[0]
    headers = [cell.value for cell in header_row]

    column_mapping = config.get("column_mapping", {})
    date_format = config.get("date_format", "%Y-%m-%d")

    col_indices = {}
    for field, col_name in column_mapping.items():
        try:
            col_indices[field] = headers.index(col_name)
        except ValueError:
            if field in REQUIRED_FIELDS:
                raise ValueError(f"Required column '{col_name}' not found in Excel file")
            col_indices[field] = None

    rows = []
    for row in sheet.iter_rows(min_row=header_row_num + 1):
        if not any(cell.value for cell in row):
            continue

        resource_val = row[col_indices["resource"]].value
        name_val = row[col_indices["name"]].value
        if not resource_val or not name_val:
            continue  # Skip rows without a resource or task name

        task = {
            "resource": str(resource_val).strip(),
            "name": str(name_val).strip(),
        }

        days_val = row[col_indices["days"]].value
        try:
            task["days"] = int(days_val) if days_val is not None else 0
        except (TypeError, ValueError):
            raise ValueError(f"Invalid days for task '{task['name']}': {days_val!r}") from None

        if col_indices.get("done") is not None:
            task["done"] = _cell_bool(row[col_indices["done"]].value)

        if col_indices.get("start") is not None:
            start = _cell_date(row[col_indices["start"]].value, date_format)
            if start:
                task["start"] = start

        rows.append(task)

    return rows


def update_project_json(new_tasks: list[dict], project_path: str = "project.json") -> dict:
    """Merge imported task rows into a project file.

    - A task that exists (same resource and name) has days/done/start updated
    - A task that doesn't exist is appended to its resource
    - A resource that doesn't exist is appended to the project

    Args:
        new_tasks: Row dictionaries from read_excel_tasks
        project_path: Path to the project file

    Returns:
        Dictionary with update statistics (added, updated, unchanged)
    """
    path = Path(project_path)

    existing_data = {"name": path.stem, "resources": [], "milestones": []}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            existing_data = json.load(f)

    resources = {r["name"]: r for r in existing_data.setdefault("resources", [])}

    stats = {"added": 0, "updated": 0, "unchanged": 0}

    for row in new_tasks:
        resource = resources.get(row["resource"])
        if resource is None:
            resource = {"name": row["resource"], "tasks": []}
            existing_data["resources"].append(resource)
            resources[row["resource"]] = resource

        incoming = {k: v for k, v in row.items() if k != "resource"}
        tasks = resource.setdefault("tasks", [])
        current = next((t for t in tasks if t.get("name") == incoming["name"]), None)

        if current is None:
            tasks.append(incoming)
            stats["added"] += 1
            continue

        changed = False
        for key in ("days", "done", "start"):
            if key in incoming and current.get(key) != incoming[key]:
                current[key] = incoming[key]
                changed = True
        if changed:
            stats["updated"] += 1
        else:
            stats["unchanged"] += 1

    with open(path, "w", encoding="utf-8") as f:
        json.dump(existing_data, f, indent=2)

    return stats
