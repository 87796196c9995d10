"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers used by the UI framework to enrich Allure reports.

Features:
- Text / JSON attachments
- Screenshot attachments from disk or bytes
- Scenario failure context (kind, lifecycle state, error, URL)

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_screenshot(source: Union[Path, str, bytes], name: str = "Screenshot"):
    """
    Attach a PNG screenshot.

    Args:
        source: Path of a PNG file, or the PNG bytes
        name: Attachment name
    """
    if isinstance(source, bytes):
        allure.attach(source, name=name, attachment_type=allure.attachment_type.PNG)
        return

    path = Path(source)
    if not path.exists():
        logger.warning(f"Screenshot not found, nothing attached: {path}")
        return
    allure.attach.file(str(path), name=name, attachment_type=allure.attachment_type.PNG)


def attach_failure_context(
    kind: str,
    state: str,
    error: BaseException,
    url: Optional[str] = None,
):
    """
    Attach the diagnostic of a failed scenario.

    Args:
        kind: Failure kind (assertion, timeout, element_not_found, ...)
        state: Lifecycle state the scenario was in when it failed
        error: The exception that ended the scenario
        url: Page URL at failure time, when known
    """
    attach_json(
        {
            "failure_kind": kind,
            "last_state": state,
            "error_type": type(error).__name__,
            "error": str(error),
            "url": url,
        },
        name="Failure Context",
    )
    if url:
        attach_text(url, name="Current URL")


__all__ = [
    "attach_failure_context",
    "attach_json",
    "attach_screenshot",
    "attach_text",
]
