"""Message catalogs for export labels and error messages."""

from __future__ import annotations

import datetime as dt
from typing import Dict


DEFAULT_LANGUAGE = "en"

CATALOGS: Dict[str, Dict[str, str]] = {
    "en": {
        "label_work_package_plural": "Work packages",
        "label_attachments": "Attachments",
        "label_description": "Description",
        "column_id": "ID",
        "column_subject": "Subject",
        "column_type": "Type",
        "column_status": "Status",
        "column_priority": "Priority",
        "column_assignee": "Assignee",
        "column_author": "Author",
        "column_start_date": "Start date",
        "column_due_date": "Finish date",
        "column_done_ratio": "Progress (%)",
        "error_pdf_export_too_many_columns": "Too many columns selected for the PDF export. Please reduce the number of columns.",
        "error_pdf_failed_to_export": "The PDF export could not be created. Please try again or contact your administrator.",
        "date_format": "%m/%d/%Y",
    },
    "de": {
        "label_work_package_plural": "Arbeitspakete",
        "label_attachments": "Anhänge",
        "label_description": "Beschreibung",
        "column_id": "ID",
        "column_subject": "Thema",
        "column_type": "Typ",
        "column_status": "Status",
        "column_priority": "Priorität",
        "column_assignee": "Zugewiesen an",
        "column_author": "Autor",
        "column_start_date": "Startdatum",
        "column_due_date": "Endtermin",
        "column_done_ratio": "Fortschritt (%)",
        "error_pdf_export_too_many_columns": "Zu viele Spalten für den PDF-Export ausgewählt. Bitte reduzieren Sie die Anzahl der Spalten.",
        "error_pdf_failed_to_export": "Der PDF-Export konnte nicht erstellt werden. Bitte versuchen Sie es erneut oder wenden Sie sich an Ihren Administrator.",
        "date_format": "%d.%m.%Y",
    },
}


def translate(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Look up key in the language catalog, falling back to English, then to the key itself."""
    catalog = CATALOGS.get(str(language or "").lower().split("-")[0], {})
    text = catalog.get(key) or CATALOGS[DEFAULT_LANGUAGE].get(key) or key
    return text.format(**kwargs) if kwargs else text


def column_caption(column: str, language: str = DEFAULT_LANGUAGE) -> str:
    key = f"column_{column}"
    text = translate(key, language)
    if text == key:
        return column.replace("_", " ").capitalize()
    return text


def format_date(value: dt.date, language: str = DEFAULT_LANGUAGE) -> str:
    return value.strftime(translate("date_format", language))
