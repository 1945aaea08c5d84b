"""Type hints used in Copa Vallejo."""

from typing import Dict, List, Optional

# Identifiers are plain strings in the document store
TeamId = str

# Group letter -> team ids in that group
GroupDraw = Dict[str, List[TeamId]]
MaybeTeamId = Optional[TeamId]
