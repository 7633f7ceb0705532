from __future__ import annotations

import csv
import json
import os
import tempfile
from typing import Any, List, Tuple

import gradio as gr

from . import accessors
from .combinators import diff_recursive, equals
from .flattening import dot, flatten_records_for_export, paths
from .formatting import to_string
from .grouping import count_by, group_by, tree
from .io_utils import read_json_content
from .logger import logger
from .records import record_roots, resolve_items_by_root


def _cell(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except TypeError:
        return str(value)


def dotted_rows(data: Any, limit: int = 20) -> List[List[str]]:
    rows = []
    for path, value in dot(data).items():
        rows.append([path, _cell(value)])
        if len(rows) >= max(1, int(limit)):
            break
    return rows


def prepare_dataset_payload(file_obj):
    if file_obj is None:
        return None, [], gr.update(choices=["(root)"], value="(root)"), "No file uploaded."

    try:
        data = read_json_content(file_obj)
    except Exception as e:
        logger.warning("Could not parse uploaded JSON: %s", e)
        return None, [], gr.update(choices=["(root)"], value="(root)"), f"Error parsing JSON: {str(e)}"

    all_paths = paths(data)
    list_paths = record_roots(data) or ["(root)"]
    default_root = "(root)" if "(root)" in list_paths else list_paths[0]
    logger.info("Loaded dataset with %d paths", len(all_paths))
    return (
        data,
        all_paths,
        gr.update(choices=list_paths, value=default_root),
        f"Successfully loaded. Found {len(all_paths)} paths.",
    )


def load_and_inspect(file_obj, limit: int = 20):
    data, all_paths, root_dropdown, message = prepare_dataset_payload(file_obj)
    path_dropdown = gr.update(choices=all_paths, value=None)
    if data is None:
        return None, path_dropdown, root_dropdown, message, []
    return data, path_dropdown, root_dropdown, message, dotted_rows(data, limit)


def lookup_path_handler(data: Any, path: str) -> Tuple[Any, str]:
    if data is None:
        return None, "No data loaded."
    if not path:
        return None, "Enter a path."

    if not accessors.has(data, path):
        return None, f"[{path}] is not present."
    value = accessors.get(data, path)
    kind = type(value).__name__ if value is not None else "null"
    return value, f"[{path}] is present ({kind})."


def export_dotted_handler(data, root_path, output_format, file_name):
    if data is None:
        return None, "No data loaded."

    items = resolve_items_by_root(data, root_path or "(root)")
    rows = flatten_records_for_export(items)
    if not rows:
        return None, "Nothing to export under the selected root."

    if not file_name or not file_name.strip():
        file_name = "output"

    ext = f".{output_format.lower()}"
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)

    try:
        if output_format == "CSV":
            headers = list(dict.fromkeys(key for row in rows for key in row))
            with open(path, 'w', newline='', encoding='utf-8') as f:
                writer = csv.DictWriter(f, fieldnames=headers)
                writer.writeheader()
                writer.writerows(rows)
        else:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(rows, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.warning("Export to %s failed: %s", path, e)
        return None, f"Error during export: {str(e)}"

    logger.info("Exported %d rows to %s", len(rows), path)
    return path, f"Export successful! Saved to {path}"


def group_records_handler(data, root_path, group_path, mode="Group"):
    if data is None:
        return "", "No data loaded."
    if not group_path:
        return "", "Enter a path to group by."

    items = resolve_items_by_root(data, root_path or "(root)")
    if mode == "Count":
        result = count_by(items, group_path)
    else:
        result = group_by(items, group_path)
    return to_string(result), f"{len(items)} records in {len(result)} groups."


def build_tree_handler(data, root_path, parent_key, children_key, id_key):
    if data is None:
        return "", "No data loaded."

    items = resolve_items_by_root(data, root_path or "(root)")
    try:
        roots = tree(items, parent_key or 'parent_id', children_key or 'children', id_key or 'id')
    except ValueError as exc:
        return "", str(exc)
    except RecursionError:
        return "", "The parent references contain a cycle."

    return to_string(roots), f"{len(roots)} root records."


def load_comparison_file(file_obj, label_prefix):
    if file_obj is None:
        return None, f"{label_prefix}: No file uploaded."
    try:
        data = read_json_content(file_obj)
    except Exception as e:
        logger.warning("%s: could not parse JSON: %s", label_prefix, e)
        return None, f"{label_prefix}: Error parsing JSON: {str(e)}"
    return data, f"{label_prefix}: Successfully loaded."


def load_left_file(file_obj):
    return load_comparison_file(file_obj, "Left document")


def load_right_file(file_obj):
    return load_comparison_file(file_obj, "Right document")


def compare_documents_handler(left, right, strict=True):
    if left is None or right is None:
        return None, "Upload both documents before comparing."
    if not (isinstance(left, (dict, list)) and isinstance(right, (dict, list))):
        return None, "Both documents must be JSON objects or arrays."

    same = equals(left, right, strict=bool(strict))
    missing_from_right = diff_recursive(left, right)
    missing_from_left = diff_recursive(right, left)
    summary = (
        f"Equal: {'yes' if same else 'no'} | "
        f"Entries only/different on the left: {len(dot(missing_from_right))} | "
        f"on the right: {len(dot(missing_from_left))}."
    )
    return {"left": missing_from_right, "right": missing_from_left}, summary
