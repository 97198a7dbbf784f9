from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from holdermap.core.models import FusedTokenRecord
from holdermap.io.report import render_report
from holdermap.io.schemas import record_to_dict


def _file_stem(record: FusedTokenRecord) -> str:
    return f"{record.chain_id}_{record.token_address}"


def write_record_json(record: FusedTokenRecord, out_dir: str, filename: Optional[str] = None) -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / (filename or f"{_file_stem(record)}.json")
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(record_to_dict(record), f, indent=2)

    return str(out_path)


def write_report_txt(
    record: FusedTokenRecord,
    out_dir: str,
    filename: Optional[str] = None,
    now_ts: Optional[int] = None,
) -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / (filename or f"{_file_stem(record)}.txt")
    out_path.write_text(render_report(record, now_ts=now_ts), encoding="utf-8")

    return str(out_path)
