"""Match lifecycle and event recording.

Every operation loads the match, checks all of its preconditions, and only
then mutates and saves it. A refused call leaves the stored match unchanged.
"""

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

from typing import Optional

from copavallejo.exceptions import (
    InvalidResultException,
    MatchStateException,
    PlayerNotInMatchException,
)
from copavallejo.models import (
    CardColour,
    CardEvent,
    GoalEvent,
    Match,
    MatchResult,
    MatchStatus,
    Player,
)
from copavallejo.repositories import MatchRepository, PlayerRepository
from copavallejo.utils import setup_logger
from copavallejo.utils.validation import validate_goals, validate_minute

logger = setup_logger(__name__)

FINISHABLE_STATES = (
    MatchStatus.SCHEDULED,
    MatchStatus.IN_PROGRESS,
    MatchStatus.SUSPENDED,
)


class MatchEngine:
    """State machine for single matches.

    SCHEDULED -> IN_PROGRESS -> FINISHED
    any state but FINISHED -> CANCELLED
    IN_PROGRESS -> SUSPENDED -> FINISHED
    """

    def __init__(self, match_repo: MatchRepository, player_repo: PlayerRepository):
        self.matches = match_repo
        self.players = player_repo

    def start(self, match_id: str) -> Match:
        match = self.matches.require(match_id)
        if match.status != MatchStatus.SCHEDULED:
            raise MatchStateException(
                f"Only a scheduled match can start; match {match_id} is "
                f"{match.status.value}"
            )
        match.status = MatchStatus.IN_PROGRESS
        self.matches.save(match)
        logger.info(f"Match {match} started")
        return match

    def record_goal(
        self, match_id: str, scorer_id: str, minute: int, own_goal: bool = False
    ) -> Match:
        """Append a goal and update the running score.

        An own goal is credited to the scorer's opponent.

        Raises:
            MatchStateException: If the match is not IN_PROGRESS
            InvalidMinuteException: If the minute is outside 0-120
            PlayerNotFoundException: If the scorer does not exist
            PlayerNotInMatchException: If the scorer plays for neither team
        """
        match = self._require_in_progress(match_id, "record a goal")
        validate_minute(minute)
        scorer = self._require_participant(match, scorer_id)

        scoring_team = (
            match.opponent_of(scorer.team_id) if own_goal else scorer.team_id
        )
        if match.result is None:
            match.result = MatchResult()
        if scoring_team == match.home_team_id:
            match.result.goals_home += 1
        else:
            match.result.goals_away += 1
        match.goals.append(GoalEvent(scorer_id, minute, own_goal))
        self.matches.save(match)
        logger.debug(
            f"Goal{' (own)' if own_goal else ''} by {scorer.full_name} at "
            f"{minute}' in match {match_id}: {match.result}"
        )
        return match

    def record_card(
        self, match_id: str, player_id: str, minute: int, colour: CardColour
    ) -> Match:
        """Append a card event. Cards do not change the score."""
        match = self._require_in_progress(match_id, "record a card")
        validate_minute(minute)
        colour = CardColour(colour)
        player = self._require_participant(match, player_id)

        match.cards.append(CardEvent(player_id, minute, colour))
        self.matches.save(match)
        logger.debug(
            f"{colour.value} card for {player.full_name} at {minute}' "
            f"in match {match_id}"
        )
        return match

    def finish(
        self,
        match_id: str,
        goals_home: int,
        goals_away: int,
        penalty_winner_id: Optional[str] = None,
    ) -> Match:
        """Close a match with its final score.

        The given score replaces any running score built from goal events.

        Raises:
            MatchStateException: If the match is FINISHED or CANCELLED
            InvalidResultException: If the score is negative, or the penalty
                winner is given for a match that is not a level knockout
                match or is not one of the two teams
        """
        match = self.matches.require(match_id)
        if match.status not in FINISHABLE_STATES:
            raise MatchStateException(
                f"Match {match_id} is {match.status.value} and cannot be finished"
            )
        validate_goals(goals_home, goals_away)
        if penalty_winner_id is not None:
            if not match.is_knockout:
                raise InvalidResultException(
                    "A penalty winner is only allowed in a knockout match"
                )
            if goals_home != goals_away:
                raise InvalidResultException(
                    "A penalty winner is only allowed when the score is level"
                )
            if penalty_winner_id not in match.team_ids:
                raise InvalidResultException(
                    f"Penalty winner {penalty_winner_id} does not play in this match"
                )

        match.result = MatchResult(goals_home, goals_away, penalty_winner_id)
        match.status = MatchStatus.FINISHED
        self.matches.save(match)
        logger.info(f"Match {match} finished")
        return match

    def cancel(self, match_id: str, reason: str) -> Match:
        """Cancel any match that has not finished, keeping the reason in notes."""
        match = self.matches.require(match_id)
        if match.status == MatchStatus.FINISHED:
            raise MatchStateException(
                f"Match {match_id} is finished and cannot be cancelled"
            )
        if match.status == MatchStatus.CANCELLED:
            logger.warning(f"Match {match_id} was already cancelled")
        match.status = MatchStatus.CANCELLED
        match.notes = reason
        self.matches.save(match)
        logger.info(f"Match {match_id} cancelled: {reason}")
        return match

    def suspend(self, match_id: str, reason: str) -> Match:
        """Interrupt a match in progress."""
        match = self._require_in_progress(match_id, "suspend it")
        match.status = MatchStatus.SUSPENDED
        match.notes = reason
        self.matches.save(match)
        logger.info(f"Match {match_id} suspended: {reason}")
        return match

    def winner(self, match_id: str) -> Optional[str]:
        return self.matches.require(match_id).winner()

    def _require_in_progress(self, match_id: str, action: str) -> Match:
        match = self.matches.require(match_id)
        if match.status != MatchStatus.IN_PROGRESS:
            raise MatchStateException(
                f"Match {match_id} is {match.status.value}; cannot {action}"
            )
        return match

    def _require_participant(self, match: Match, player_id: str) -> Player:
        player = self.players.require(player_id)
        if not match.involves(player.team_id):
            raise PlayerNotInMatchException(
                f"Player {player.full_name} does not play for either team"
            )
        return player
