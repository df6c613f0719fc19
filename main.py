"""Simple entrypoint to run the style engine locally."""

from decor_app.app import StyleEngine

DEMO_SELECTED = {
    "id": "demo-table",
    "title": "Walnut coffee table",
    "category": "table",
    "style": "modern",
    "price": 500,
    "colors": ["#FFFFFF"],
}
DEMO_CANDIDATES = [
    {"id": "demo-sofa", "title": "Leather sofa", "category": "sofa", "style": "modern", "price": 1299},
    {"id": "demo-rug", "title": "Wool rug", "category": "rug", "style": "scandinavian", "price": 299},
    {"id": "demo-side", "title": "Side table", "category": "table", "style": "rustic", "price": 249},
]


def main() -> None:
    engine = StyleEngine(configure=True)
    for match in engine.rank_matches(DEMO_SELECTED, DEMO_CANDIDATES, mode="score"):
        print(match.item.item_id, round(match.match_score.overall, 3))


if __name__ == "__main__":
    main()
