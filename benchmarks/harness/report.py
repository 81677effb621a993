import json
from pathlib import Path

_COLUMNS = ("wall_time_s", "ops_per_s", "rss_delta_mb", "vertices", "edges", "mc")


def _fmt(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return f"{value:,.4g}" if abs(value) < 1e4 else f"{value:,.0f}"
    return f"{value:,}" if isinstance(value, int) else str(value)


def render(json_path: str):
    """Print benchmark results as markdown: one table of timed operations per
    module, followed by its plain counters."""
    data = json.loads(Path(json_path).read_text())
    sizes = data.get("sizes", {})
    print(f"# wgraph benchmark ({data['scale']})\n")
    if sizes:
        print(f"{sizes['vertices']:,} vertices, {sizes['edges']:,} edge insertions\n")

    for name, res in data["benchmarks"].items():
        print(f"## {name}")
        if "skipped" in res:
            print(f"- SKIPPED: {res['error']}\n")
            continue
        timed = {k: v for k, v in res.items() if isinstance(v, dict) and "wall_time_s" in v}
        if timed:
            print("| operation | " + " | ".join(_COLUMNS) + " |")
            print("|---" * (len(_COLUMNS) + 1) + "|")
            for op, m in timed.items():
                print(f"| {op} | " + " | ".join(_fmt(m.get(c)) for c in _COLUMNS) + " |")
            print()
        for k, v in res.items():
            if k not in timed:
                print(f"- {k}: {_fmt(v)}")
        print()


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser()
    p.add_argument("json_path", nargs="?", default="benchmark_results.json")
    render(p.parse_args().json_path)
