"""A registered footballer. Eligibility rules live in the quota evaluator."""

# Copa Vallejo
# Copyright (C) 2025  Copa Vallejo developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from copavallejo.models.enums import (
    CATEGORY_LABELS,
    PlayerCategory,
    Position,
    QuotaGroup,
    ValidationStatus,
    quota_groups_for,
)


@dataclass
class Player:
    """Represents a player registered with a team.

    Attributes:
        id: Document id
        team_id: Team the player is registered with
        first_name: Given name
        last_name: Family name
        national_id: National id (cedula), unique across the system
        birth_date: Date of birth
        shirt_number: Shirt number, unique among the team's non-rejected players
        category: Eligibility category
        position: Playing position
        validation_status: Review state of the registration
        validated_by: Id of the user who reviewed the registration
        validated_at: When the registration was reviewed
        notes: Reviewer notes
    """

    id: str
    team_id: str
    first_name: str
    last_name: str
    national_id: str
    birth_date: date
    shirt_number: int
    category: PlayerCategory
    position: Position = Position.MIDFIELDER
    validation_status: ValidationStatus = ValidationStatus.PENDING
    validated_by: Optional[str] = None
    validated_at: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS[self.category]

    @property
    def quota_groups(self) -> FrozenSet[QuotaGroup]:
        """Quota groups this player counts towards once validated."""
        return quota_groups_for(self.category)

    @property
    def is_foreign(self) -> bool:
        return QuotaGroup.FOREIGN in self.quota_groups

    @property
    def is_validated(self) -> bool:
        return self.validation_status == ValidationStatus.VALIDATED

    @property
    def is_rejected(self) -> bool:
        return self.validation_status == ValidationStatus.REJECTED

    def age_on(self, as_of: Optional[date] = None) -> int:
        """Calculate age in whole years on a given day.

        Args:
            as_of: Reference day, today when omitted

        Returns:
            Completed years between birth date and the reference day
        """
        reference = as_of or date.today()
        return relativedelta(reference, self.birth_date).years

    @property
    def age(self) -> int:
        return self.age_on()

    def to_dict(self) -> Dict[str, Any]:
        """Convert player to dictionary for serialization.

        Dates are stored as ISO 8601 strings.
        """
        return {
            "id": self.id,
            "team_id": self.team_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "national_id": self.national_id,
            "birth_date": self.birth_date.isoformat(),
            "shirt_number": self.shirt_number,
            "category": self.category.value,
            "position": self.position.value,
            "validation_status": self.validation_status.value,
            "validated_by": self.validated_by,
            "validated_at": (
                self.validated_at.isoformat() if self.validated_at else None
            ),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        """Create player from dictionary."""
        birth_date = data["birth_date"]
        if isinstance(birth_date, str):
            birth_date = date_parser.isoparse(birth_date).date()

        validated_at = data.get("validated_at")
        if isinstance(validated_at, str):
            validated_at = date_parser.isoparse(validated_at)

        return cls(
            id=data["id"],
            team_id=data["team_id"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            national_id=data["national_id"],
            birth_date=birth_date,
            shirt_number=int(data["shirt_number"]),
            category=PlayerCategory(data["category"]),
            position=Position(data.get("position", Position.MIDFIELDER.value)),
            validation_status=ValidationStatus(
                data.get("validation_status", ValidationStatus.PENDING.value)
            ),
            validated_by=data.get("validated_by"),
            validated_at=validated_at,
            notes=data.get("notes"),
        )
