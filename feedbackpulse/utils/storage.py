"""
Storage utility.

File I/O helpers for insight snapshots.
"""

import json
import os
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O for data persistence outside the response registry.

    Handles:
    - Insight snapshots (data/insights/<form_id>/YYYY-MM-DD.json)
    """

    def __init__(self, data_root: str):
        """
        Initialize storage manager.

        Args:
            data_root: Root data directory (e.g., /path/to/data)
        """
        self.data_root = data_root
        self.insights_dir = os.path.join(data_root, "insights")

        os.makedirs(self.insights_dir, exist_ok=True)

        logger.info(f"Initialized StorageManager with data_root={data_root}")

    def _snapshot_path(self, form_id: str, date: str) -> str:
        return os.path.join(self.insights_dir, form_id, f"{date}.json")

    def save_snapshot(self, snapshot: Dict, form_id: str, date: str) -> str:
        """
        Save an insight snapshot for a form.

        Args:
            snapshot: Snapshot dict (InsightSnapshot.to_dict())
            form_id: Form the snapshot describes
            date: Date in YYYY-MM-DD format

        Returns:
            Path of the written file
        """
        filepath = self._snapshot_path(form_id, date)
        os.makedirs(os.path.dirname(filepath), exist_ok=True)

        try:
            with open(filepath, 'w') as f:
                json.dump(snapshot, f, indent=2)
            logger.info(f"Saved insight snapshot to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save insight snapshot for {form_id} on {date}: {e}")
            raise

        return filepath

    def load_snapshot(self, form_id: str, date: str) -> Optional[Dict]:
        """
        Load an insight snapshot.

        Args:
            form_id: Form the snapshot describes
            date: Date in YYYY-MM-DD format

        Returns:
            Snapshot dict, or None if file doesn't exist or can't be read
        """
        filepath = self._snapshot_path(form_id, date)

        if not os.path.exists(filepath):
            logger.debug(f"No insight snapshot found for {form_id} on {date}")
            return None

        try:
            with open(filepath, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load insight snapshot for {form_id} on {date}: {e}")
            return None

    def list_snapshot_dates(self, form_id: str) -> List[str]:
        """
        Get all dates that have a snapshot for a form.

        Returns:
            Sorted list of dates in YYYY-MM-DD format
        """
        form_dir = os.path.join(self.insights_dir, form_id)
        if not os.path.isdir(form_dir):
            return []

        dates = [
            filename[:-len('.json')]
            for filename in os.listdir(form_dir)
            if filename.endswith('.json')
        ]
        return sorted(dates)
