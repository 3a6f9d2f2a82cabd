"""Example usage of DiverseQuerySelector with JSON input file.

This script reads a query and its candidate variants from a JSON file and
selects a diverse yet relevant subset of the variants.

JSON format:
    {
        "query": "original user query",
        "candidates": ["variant 1", "variant 2", "..."],
        "k": 3,
        "alpha": 0.3
    }

"k" and "alpha" are optional; without "k" the number of variants is chosen
from the query complexity estimate.

Usage:
    cd ..
    python _examples/example.py [path_to_input.json]

Example:
    python example.py                 # Uses default example_in.json
    python example.py myinput.json    # Uses custom JSON file
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from diverse_query_selector import DiverseQuerySelector
from selection_config import SelectionConfig

class Colors:
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_CYAN = "\033[96m"
    DIM = "\033[2m"
    RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format= Colors.DIM + '%(asctime)s [%(levelname)s] ◦ %(name)s ◦ %(message)s' + Colors.RESET,
    handlers=[
        logging.StreamHandler()
    ]
)

logging.getLogger("httpx").setLevel(logging.WARNING)


class SelectionParams:
    """Data class for selection parameters."""
    def __init__(
        self,
        query: str,
        candidates: List[str],
        k: Optional[int] = None,
        alpha: Optional[float] = None
    ):
        self.query = query
        self.candidates = candidates
        self.k = k
        self.alpha = alpha


def parse_input_file(filepath: str) -> SelectionParams:
    """Parse JSON input file and extract selection parameters.

    Args:
        filepath: Path to the JSON input file

    Returns:
        SelectionParams object with all selection parameters
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("JSON input must be an object")

    query = data.get("query")
    candidates = data.get("candidates", [])

    if not query:
        raise ValueError("query is required")
    if not isinstance(candidates, list) or not all(isinstance(c, str) for c in candidates):
        raise ValueError("candidates must be a list of strings")

    return SelectionParams(
        query=query,
        candidates=candidates,
        k=data.get("k"),
        alpha=data.get("alpha")
    )


def print_call(name: str, params: dict) -> None:
    """Print a selector call in the specified format."""
    params_str = json.dumps(params, ensure_ascii=False)
    print(f"🛠️  {Colors.YELLOW}call → → → ◦ [{name}] ◦ {Colors.BRIGHT_YELLOW}{params_str}{Colors.RESET}")


def print_response(name: str, data: dict) -> None:
    """Print a selector response in the specified format."""
    print(f"📄 {Colors.CYAN}call ← ← ← ◦ [{name}] ◦")
    pretty_data = json.dumps(data, indent=2, ensure_ascii=False)
    print(f"{Colors.BRIGHT_CYAN}{pretty_data}{Colors.RESET}")


def main():
    if len(sys.argv) > 1:
        input_file = sys.argv[1]
    else:
        input_file = "example_in.json"

    input_path = Path(input_file)

    if not input_path.exists():
        print(f"❌ Input file not found: {input_file}")
        print()
        print("Create a JSON file with the following format:")
        print("-" * 40)
        print(json.dumps({
            "query": "go to site",
            "candidates": [
                "go to site",
                "Step by step: go to site",
                "go to site. If errors occur, try alternative approaches.",
                "go to site. Verify each step before proceeding."
            ],
            "k": 2,
            "alpha": 0.3
        }, indent=4))
        print("-" * 40)
        sys.exit(1)

    print("=" * 60)
    print("Diverse Query Selector")
    print("=" * 60)
    print()

    try:
        params = parse_input_file(str(input_path))
    except (OSError, ValueError) as e:
        print(f"❌ Error parsing input file: {e}")
        sys.exit(1)

    print(f"🔍 Query: {params.query}")
    print(f"📋 Candidates: {len(params.candidates)}")
    print(f"🔢 k: {params.k if params.k is not None else '(adaptive)'}")
    print()

    config = SelectionConfig.from_env()
    selector = DiverseQuerySelector(config=config)

    print_call('select', {
        'query': params.query,
        'candidates': len(params.candidates),
        'k': params.k,
        'alpha': params.alpha
    })

    try:
        result = selector.select(
            params.query,
            params.candidates,
            k=params.k,
            alpha=params.alpha
        )
    except ValueError as e:
        print(f"❌ Invalid parameters: {e}")
        sys.exit(1)

    print_response('select', result.to_dict())


if __name__ == "__main__":
    main()
