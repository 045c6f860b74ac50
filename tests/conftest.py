from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    """Read a text fixture relative to tests/fixtures."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")
