"""
Tests for CSV export.
"""

import pandas as pd

from swiftcard.export import CSV_COLUMNS, export_cards_csv
from swiftcard.models import BusinessCard


class TestExportCardsCsv:
    """Test cases for export_cards_csv."""

    def test_writes_all_cards(self, tmp_path):
        cards = [
            BusinessCard(id="c1", name="Jane Doe", company="Globex", title="CTO"),
            BusinessCard(id="c2", name="John Smith", image_url="/api/images/c2.png"),
        ]

        path = export_cards_csv(cards, output_folder=str(tmp_path), filename="cards.csv")
        df = pd.read_csv(path, keep_default_na=False)

        assert path.name == "cards.csv"
        assert list(df.columns) == CSV_COLUMNS
        assert df["name"].tolist() == ["Jane Doe", "John Smith"]
        assert df["imageURL"].tolist() == ["", "/api/images/c2.png"]

    def test_empty_export_has_header(self, tmp_path):
        path = export_cards_csv([], output_folder=str(tmp_path / "new"))

        assert path.exists()
        assert path.name.startswith("business_cards_")
        assert path.read_text().strip() == ",".join(CSV_COLUMNS)
