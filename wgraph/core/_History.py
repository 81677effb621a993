import json
import time
from datetime import UTC, datetime

import numpy as np
import polars as pl


class ChangeCounter:
    """Monotonic modification count shared by the vertex store and adjacency index.

    Every structural or weight mutation calls :meth:`bump` exactly once. When a
    journal is attached and enabled, the bump is also recorded there, so the
    history holds one event per counted change and nothing for no-ops.
    """

    __slots__ = ("_value", "journal")

    def __init__(self, journal=None, start: int = 0):
        self._value = int(start)
        self.journal = journal

    @property
    def value(self) -> int:
        return self._value

    def bump(self, op: str, **fields) -> int:
        self._value += 1
        if self.journal is not None and self.journal.enabled:
            self.journal.record(self._value, op, fields)
        return self._value

    def __int__(self):
        return self._value

    def __repr__(self):
        return f"ChangeCounter({self._value})"


class MutationJournal:
    # History and Timeline

    def __init__(self, enabled: bool = False):
        self.enabled = bool(enabled)
        self._events = []  # list[dict]
        self._clock0 = time.perf_counter_ns()

    def __len__(self):
        return len(self._events)

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make fields JSON-safe & compact.
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, (np.generic,)):
            return x.item()
        t = type(x).__name__
        return f"<<{t}>>"

    def record(self, version: int, op: str, fields: dict):
        evt = {
            "version": version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._clock0,
            "op": op,
        }
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._events.append(evt)

    def events(self):
        return [dict(e) for e in self._events]

    def as_df(self):
        # scan every event: early rows (e.g. add_vertex) lack edge columns
        return pl.from_dicts(self._events, infer_schema_length=None)

    def export(self, path: str) -> int:
        """Write the events to disk.

        Parameters
        --
        path : str
            Output path. Supported extensions: '.parquet', '.ndjson' (a.k.a. '.jsonl'),
            '.json', '.csv'. Unknown extensions default to Parquet by appending '.parquet'.

        Returns
        ---
        int
            Number of events written. Returns 0 if the journal is empty.

        """
        if not self._events:
            return 0
        df = self.as_df()
        p = str(path).lower()
        if p.endswith(".parquet"):
            df.write_parquet(path)
            return len(df)
        if p.endswith(".ndjson") or p.endswith(".jsonl"):
            with open(path, "w", encoding="utf-8") as f:
                for r in df.iter_rows(named=True):
                    f.write(json.dumps(r, ensure_ascii=False) + "\n")
            return len(df)
        if p.endswith(".json"):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(df.to_dicts(), f, ensure_ascii=False)
            return len(df)
        if p.endswith(".csv"):
            df.write_csv(path)
            return len(df)
        df.write_parquet(f"{path}.parquet")
        return len(df)

    def clear(self):
        self._events.clear()

    def copy(self, events: bool = True):
        new = MutationJournal(enabled=self.enabled)
        if events:
            new._events = [dict(e) for e in self._events]
        return new
