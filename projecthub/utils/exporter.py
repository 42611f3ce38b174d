"""Export the displayed project snapshot to CSV or Excel."""

import csv
import os
import sys
from datetime import datetime

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows
from tqdm import tqdm

EXPORT_COLUMNS = ['id', 'name', 'description']


class SnapshotExporter:
    """Write a list of projects to the output directory."""

    def __init__(self, config, debug_logger=None):
        """Initialize the exporter.

        Args:
            config (Config): Configuration instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.config = config
        self.logger = debug_logger

    def get_output_file_path(self, extension='.csv'):
        """Generate a timestamped output file path."""
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = self.config.output_filename_template.format(timestamp=timestamp)
        base, _ = os.path.splitext(filename)
        return os.path.join(self.config.output_directory, base + extension)

    def export_csv(self, projects, output_path=None):
        """Write projects to a CSV file.

        Args:
            projects (list): List of Project objects
            output_path (str, optional): Target path; generated when omitted

        Returns:
            str: Path of the written file
        """
        output_path = output_path or self.get_output_file_path('.csv')
        self._ensure_parent(output_path)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
            writer.writeheader()
            for project in self._progress(projects, "Writing CSV"):
                writer.writerow(project.to_dict())

        if self.logger:
            self.logger.log(f"Exported {len(projects)} projects to {output_path}")
        return output_path

    def export_xlsx(self, projects, output_path=None):
        """Write projects to an Excel workbook.

        Returns:
            str: Path of the written file
        """
        output_path = output_path or self.get_output_file_path('.xlsx')
        self._ensure_parent(output_path)

        df = pd.DataFrame([p.to_dict() for p in projects], columns=EXPORT_COLUMNS)

        wb = Workbook()
        ws = wb.active
        ws.title = "Projects"

        rows = dataframe_to_rows(df, index=False, header=True)
        for row in self._progress(rows, "Writing Excel", total=len(df) + 1):
            ws.append(row)

        wb.save(output_path)

        if self.logger:
            self.logger.log(f"Exported {len(projects)} projects to {output_path}")
        return output_path

    def _progress(self, iterable, description, total=None):
        return tqdm(
            iterable,
            total=total,
            desc=description,
            unit="rows",
            ncols=100,
            file=sys.stdout,
            disable=not self.config.debug
        )

    def _ensure_parent(self, output_path):
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
