import random
import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from hexnet.engine import ConnectivityEngine
from hexnet.render import render_png


def main() -> None:
    output_dir = ROOT / "validation_outputs"
    output_dir.mkdir(parents=True, exist_ok=True)

    engine = ConnectivityEngine(rng=random.Random(20))
    errors = engine.tessellation.validate()
    if errors:
        raise SystemExit("\n".join(errors))

    render_png(engine.tessellation, output_dir / "terminals.png", terminals=engine.terminals)

    summary = engine.solve()
    for key, value in summary.items():
        print(f"{key}: {value}")

    first = min(engine.terminals)
    render_png(
        engine.tessellation,
        output_dir / "network.png",
        result=engine.result,
        highlight=engine.bloom(first),
    )
    print("Saved PNGs to", output_dir)


if __name__ == "__main__":
    main()
