import argparse
import asyncio
import json
import logging
import pathlib
import sys
from typing import Any

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.app.deps import get_canonicalizer, get_recipe_store
from src.app.domain.models import Recipe
from src.app.services.cookbook_service import CookbookService

log = logging.getLogger("seed_recipes")


def load_seed_file(path: pathlib.Path) -> list[dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("recipes") or []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of recipes in {path}")
    return [item for item in data if isinstance(item, dict)]


async def seed(path: pathlib.Path) -> list[Recipe]:
    store = await get_recipe_store()
    cookbook = CookbookService(store, get_canonicalizer())

    persisted: list[Recipe] = []
    for item in load_seed_file(path):
        recipe = await cookbook.ensure_recipe_in_cookbook(Recipe.from_dict(item), is_seed=True)
        log.info("seed recipe: id=%s title=%s likes=%d", recipe.id, recipe.title, recipe.likes)
        persisted.append(recipe)
    return persisted


def main() -> None:
    parser = argparse.ArgumentParser(description="Load curated seed recipes into the cookbook")
    parser.add_argument(
        "path",
        nargs="?",
        type=pathlib.Path,
        default=ROOT / "data" / "seed_recipes.json",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    persisted = asyncio.run(seed(args.path))
    print(f"{len(persisted)} seed recipes in cookbook")


if __name__ == "__main__":
    main()
