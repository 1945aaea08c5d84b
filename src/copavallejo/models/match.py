"""Match, result and event data classes."""

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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from copavallejo.exceptions import InvalidMatchException
from copavallejo.models.enums import CardColour, MatchStatus


@dataclass
class GoalEvent:
    """A goal scored during a match."""

    player_id: str
    minute: int
    own_goal: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "minute": self.minute,
            "own_goal": self.own_goal,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GoalEvent:
        return cls(
            player_id=data["player_id"],
            minute=int(data["minute"]),
            own_goal=bool(data.get("own_goal", False)),
        )


@dataclass
class CardEvent:
    """A card shown during a match."""

    player_id: str
    minute: int
    colour: CardColour

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "minute": self.minute,
            "colour": self.colour.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CardEvent:
        return cls(
            player_id=data["player_id"],
            minute=int(data["minute"]),
            colour=CardColour(data["colour"]),
        )


@dataclass
class MatchResult:
    """Score of a match.

    Attributes:
        goals_home: Goals of the home team
        goals_away: Goals of the away team
        penalty_winner_team_id: Shoot-out winner of a level knockout match
    """

    goals_home: int = 0
    goals_away: int = 0
    penalty_winner_team_id: Optional[str] = None

    @property
    def is_level(self) -> bool:
        return self.goals_home == self.goals_away

    def to_dict(self) -> Dict[str, Any]:
        """Serialize result to the persisted camelCase shape."""
        data: Dict[str, Any] = {
            "goalsHome": self.goals_home,
            "goalsAway": self.goals_away,
        }
        if self.penalty_winner_team_id is not None:
            data["penaltyWinnerTeamId"] = self.penalty_winner_team_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MatchResult:
        return cls(
            goals_home=int(data.get("goalsHome", data.get("golesLocal", 0))),
            goals_away=int(data.get("goalsAway", data.get("golesVisitante", 0))),
            penalty_winner_team_id=data.get(
                "penaltyWinnerTeamId", data.get("ganadorPenales")
            ),
        )

    def __str__(self) -> str:
        text = f"{self.goals_home}-{self.goals_away}"
        if self.penalty_winner_team_id:
            text += f" (pens: {self.penalty_winner_team_id})"
        return text


@dataclass
class Match:
    """A fixture between two teams within a phase.

    Attributes:
        id: Document id
        phase_id: Owning phase
        tournament_id: Owning tournament
        home_team_id: Home team
        away_team_id: Away team, never equal to the home team
        status: Lifecycle state
        result: Score, None until the first goal or the final whistle
        matchday: Matchday number
        group: Group letter for GROUPS phases
        is_knockout: Knockout fixture flag; enables penalty winners
        scheduled_at: Kick-off date and time
        venue: Pitch name
        referee: Referee name
        goals: Goal events in recording order
        cards: Card events in recording order
        notes: Free text, holds the cancellation or suspension reason
    """

    id: str
    phase_id: str
    tournament_id: str
    home_team_id: str
    away_team_id: str
    status: MatchStatus = MatchStatus.SCHEDULED
    result: Optional[MatchResult] = None
    matchday: Optional[int] = None
    group: Optional[str] = None
    is_knockout: bool = False
    scheduled_at: Optional[datetime] = None
    venue: Optional[str] = None
    referee: Optional[str] = None
    goals: List[GoalEvent] = field(default_factory=list)
    cards: List[CardEvent] = field(default_factory=list)
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.home_team_id == self.away_team_id:
            raise InvalidMatchException(
                f"A team cannot play itself: {self.home_team_id}"
            )

    @property
    def team_ids(self) -> List[str]:
        return [self.home_team_id, self.away_team_id]

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def opponent_of(self, team_id: str) -> str:
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise ValueError(f"Team {team_id} does not play in match {self.id}")

    @property
    def is_finished(self) -> bool:
        return self.status == MatchStatus.FINISHED

    @property
    def is_draw(self) -> bool:
        """Level finished match with no shoot-out winner."""
        return (
            self.is_finished
            and self.result is not None
            and self.result.is_level
            and not self.result.penalty_winner_team_id
        )

    def winner(self) -> Optional[str]:
        """Return the winning team id.

        None while the match is not finished and on a level score without a
        penalty winner. A penalty winner takes precedence over the score.
        """
        if not self.is_finished or self.result is None:
            return None
        if self.result.penalty_winner_team_id:
            return self.result.penalty_winner_team_id
        if self.result.goals_home > self.result.goals_away:
            return self.home_team_id
        if self.result.goals_away > self.result.goals_home:
            return self.away_team_id
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "phase_id": self.phase_id,
            "tournament_id": self.tournament_id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "status": self.status.value,
            "result": self.result.to_dict() if self.result else None,
            "matchday": self.matchday,
            "group": self.group,
            "is_knockout": self.is_knockout,
            "scheduled_at": (
                self.scheduled_at.isoformat() if self.scheduled_at else None
            ),
            "venue": self.venue,
            "referee": self.referee,
            "goals": [goal.to_dict() for goal in self.goals],
            "cards": [card.to_dict() for card in self.cards],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Match:
        """Deserialize match from dictionary."""
        scheduled_at = data.get("scheduled_at")
        if isinstance(scheduled_at, str):
            scheduled_at = date_parser.isoparse(scheduled_at)
        result = data.get("result")
        return cls(
            id=data["id"],
            phase_id=data["phase_id"],
            tournament_id=data["tournament_id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
            result=MatchResult.from_dict(result) if result else None,
            matchday=data.get("matchday"),
            group=data.get("group"),
            is_knockout=bool(data.get("is_knockout", False)),
            scheduled_at=scheduled_at,
            venue=data.get("venue"),
            referee=data.get("referee"),
            goals=[GoalEvent.from_dict(g) for g in data.get("goals", [])],
            cards=[CardEvent.from_dict(c) for c in data.get("cards", [])],
            notes=data.get("notes"),
        )

    def __str__(self) -> str:
        score = f" {self.result}" if self.result else ""
        return f"{self.home_team_id} vs {self.away_team_id}{score} [{self.status.value}]"
