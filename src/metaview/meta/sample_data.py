"""Hard-coded payload shown when the data source is empty, invalid or unreachable."""

from typing import Any, Dict

SAMPLE_PAYLOAD: Dict[str, Dict[str, Any]] = {
    "A": {"component": "tcmId", "component1": "tcmId1"},
    "B": {"component": "tcmIdB", "component1": "tcmIdB1"},
    "C": {"fieldX": "tcmX", "fieldY": "tcmY", "fieldZ": "tcmZ"},
}
