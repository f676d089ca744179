"""Write the Card Vote API's OpenAPI document to disk."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app import create_app
from config import settings


def main(output_path: Optional[Path] = None) -> Path:
    output_path = output_path or ROOT / "openapi.json"
    app = create_app(settings.model_copy(update={"banlist_refresh_on_startup": False}))
    schema = app.openapi()
    output_path.write_text(json.dumps(schema, indent=2))
    print(f"OpenAPI document written to {output_path}")
    return output_path


if __name__ == "__main__":
    main(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
