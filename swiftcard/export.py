"""
CSV export of saved business cards.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .models import BusinessCard

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["id", "name", "company", "title", "imageURL"]


def export_cards_csv(
    cards: Iterable[BusinessCard],
    output_folder: str = "outputs",
    filename: Optional[str] = None
) -> Path:
    """Write cards to a CSV file.

    Args:
        cards: Cards to export
        output_folder: Directory for the CSV file
        filename: File name; timestamped if not given

    Returns:
        Path to the written file
    """
    folder = Path(output_folder)
    folder.mkdir(parents=True, exist_ok=True)
    if filename is None:
        filename = f"business_cards_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    df = pd.DataFrame([card.to_dict() for card in cards], columns=CSV_COLUMNS)
    path = folder / filename
    df.to_csv(path, index=False)

    logger.info(f"Exported {len(df)} cards to {path}")
    return path
