import json
from typing import Dict, Tuple


FORMATS = ("txt", "json", "ndjson", "csv", "tsv")


def truncate_fraction(value: str, digits: int) -> str:
    digits = int(digits)
    if digits < 0:
        raise ValueError("digits must be >= 0")
    if "." in value:
        head, tail = value.split(".", 1)
    else:
        head, tail = value, ""
    if digits == 0:
        return head
    if len(tail) < digits:
        tail = tail + ("0" * (digits - len(tail)))
    return head + "." + tail[:digits]


def serialize_result(value: str, fmt: str, meta: Dict) -> Tuple[bytes, str]:
    fmt = fmt.lower().strip()
    if fmt == "txt":
        return (value + "\n").encode("utf-8"), "text/plain"
    if fmt in {"json", "ndjson"}:
        payload = dict(meta)
        payload["value"] = value
        out = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        if fmt == "ndjson":
            return (out + "\n").encode("utf-8"), "application/x-ndjson"
        return out.encode("utf-8"), "application/json"
    if fmt in {"csv", "tsv"}:
        sep = "," if fmt == "csv" else "\t"
        header = ["digits", "precision", "series_terms", "workers", "value"]
        row = [str(meta.get(h)) for h in header[:-1]] + [value]
        out = sep.join(header) + "\n" + sep.join(row) + "\n"
        mime = "text/csv" if fmt == "csv" else "text/tab-separated-values"
        return out.encode("utf-8"), mime
    raise ValueError("unsupported format")
