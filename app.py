import os
import time
import threading
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, render_template_string

from bstmap.generator import generate
from bstmap.indexing import InvalidKeyType
from bstmap.query_engine import QueryEngine
from bstmap.storage import PhoneBook

app = Flask(__name__)

book = PhoneBook()
qe = QueryEngine(book)

# The indexes have no locking of their own; every handler holds this.
LOCK = threading.Lock()

STATE: Dict[str, Any] = {"seed_count": 0, "seed": None, "seeded": False}

SEED_COUNT = int(os.environ.get("PHONEBOOK_SEED_COUNT", "0"))
SEED = os.environ.get("PHONEBOOK_SEED")
LIMIT_MAX = int(os.environ.get("PHONEBOOK_LIMIT_MAX", "200"))


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status

def parse_limit(raw: Optional[str], default: int = 50) -> int:
    try:
        return max(1, min(LIMIT_MAX, int(raw)))
    except (TypeError, ValueError):
        return default

def warm_start():
    """Seed the phone book with generated entries at startup."""
    STATE["seed_count"] = SEED_COUNT
    STATE["seed"] = SEED

    if SEED_COUNT <= 0:
        print("[warm_start] No seed entries requested.")
        return

    seed = int(SEED) if SEED is not None else None
    print(f"[warm_start] Generating {SEED_COUNT:,} entries (seed={seed})")
    t0 = time.time()
    with LOCK:
        book.load_entries(generate(SEED_COUNT, seed=seed))
    t1 = time.time()
    STATE["seeded"] = True
    print(f"[warm_start] Phone book loaded: {len(book):,} entries in {t1 - t0:.2f}s")


@app.get("/api/status")
def api_status():
    with LOCK:
        return ok({
            "entries": len(book),
            "name_index_height": book.name_index.height(),
            "phone_index_size": len(book.phone_index),
            "seed_count": STATE["seed_count"],
            "seeded": STATE["seeded"],
        })


@app.get("/api/entries")
def api_entries():
    start = request.args.get("start")
    stop = request.args.get("stop")
    prefix = request.args.get("prefix")
    limit = parse_limit(request.args.get("limit"))

    with LOCK:
        if prefix is not None:
            rows = qe.by_prefix(prefix, limit=limit)
        else:
            rows = qe.range_by_name(start, stop, limit=limit)
    return ok({"count_returned": len(rows), "rows": rows})

@app.get("/api/entries/<name>")
def api_entry(name: str):
    with LOCK:
        rec = qe.by_name(name)
    if rec is None:
        return err("entry not found", 404)
    return ok(rec)

@app.get("/api/numbers/<phone>")
def api_number(phone: str):
    limit = parse_limit(request.args.get("limit"))
    with LOCK:
        rows = qe.by_number(phone, limit=limit)
    return ok({"count_returned": len(rows), "rows": rows})


@app.post("/api/entries")
def api_insert():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return err("JSON object body required")
    missing = [k for k in ("name", "phone") if not data.get(k)]
    if missing:
        return err(f"missing fields: {missing}")

    fields = dict(data)
    name = str(fields.pop("name")).strip()
    phone = str(fields.pop("phone")).strip()

    try:
        with LOCK:
            new_id = book.add_entry(name, phone, **fields)
            record = book.lookup(name)
    except (InvalidKeyType, ValueError) as e:
        return err(str(e))

    if new_id is None:
        return err("insert ignored (name already exists)", 409, record=record)
    return ok({"record_id": new_id, "record": record})

@app.post("/api/entries/<name>/phone")
def api_update_phone(name: str):
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return err("JSON object body required")
    phone = str(data.get("phone") or "").strip()
    if not phone:
        return err("phone JSON body required")

    with LOCK:
        updated = book.update_phone(name, phone)
        record = book.lookup(name)
    if not updated:
        return err("entry not found", 404)
    return ok({"updated": True, "record": record})


HTML = r"""
<!doctype html>
<html>
<head><meta charset="utf-8"><title>Phone Book</title></head>
<body>
<h1>Phone Book</h1>
<p>{{ count }} entries, index height {{ height }}</p>
<table>
  <tr><th>Name</th><th>Phone</th></tr>
  {% for rec in rows %}
  <tr><td>{{ rec.name }}</td><td>{{ rec.phone }}</td></tr>
  {% endfor %}
</table>
</body>
</html>
"""

@app.get("/")
def home():
    with LOCK:
        rows = qe.range_by_name(limit=LIMIT_MAX)
        count = len(book)
        height = book.name_index.height()
    return render_template_string(HTML, rows=rows, count=count, height=height)

if __name__ == "__main__":
    warm_start()
    app.run(host="127.0.0.1", port=5000, debug=True, use_reloader=False)
