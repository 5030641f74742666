"""
Tournament Notifications

Observers notified after a tournament has been created. Delivery is
synchronous and runs inside the request that created the tournament.
"""

from dataclasses import dataclass
from typing import Mapping, Protocol

import structlog

from ..constants import START_DATE_FORMAT
from ..domain.entities import Tournament

logger = structlog.get_logger()

EMAIL_SUBJECT = "New Tournament Created!"

EMAIL_TEMPLATE = """
Hi {name},

A new tournament has been created!

Tournament: {tournament}
Prize Pool: ${prize_pool:.2f}
Start Date: {start_date}

Don't miss out! Register your team now.

Best regards,
GameClub Team
"""


@dataclass(frozen=True)
class TournamentCreatedEvent:
    """Essential tournament details carried to observers."""

    name: str
    start_date: str
    prize_pool: float

    @classmethod
    def from_tournament(cls, tournament: Tournament) -> "TournamentCreatedEvent":
        return cls(
            name=tournament.name,
            start_date=tournament.start_date.strftime(START_DATE_FORMAT),
            prize_pool=tournament.calculated_prize_pool,
        )


class TournamentObserver(Protocol):
    def on_tournament_created(self, event: TournamentCreatedEvent) -> None: ...


class LogNotifier:
    """Writes an audit log entry per created tournament."""

    def on_tournament_created(self, event: TournamentCreatedEvent) -> None:
        logger.info(
            "Tournament created",
            tournament=event.name,
            prize_pool=round(event.prize_pool, 2),
            start_date=event.start_date,
        )


class EmailNotifier:
    """
    Emails every club member about a new tournament.

    Sending is simulated: each message is logged instead of handed to a mail
    transport.
    """

    def __init__(self, recipients: Mapping[str, str]):
        # email -> first name
        self.recipients = dict(recipients)

    def on_tournament_created(self, event: TournamentCreatedEvent) -> None:
        for email, name in self.recipients.items():
            self.send_email(email, EMAIL_SUBJECT, self.format_email(name, event))

        logger.info(
            "Sent tournament creation emails", recipients=len(self.recipients)
        )

    def send_email(self, to: str, subject: str, body: str) -> None:
        logger.debug("Sending email", to=to, subject=subject, body=body)

    @staticmethod
    def format_email(name: str, event: TournamentCreatedEvent) -> str:
        return EMAIL_TEMPLATE.format(
            name=name,
            tournament=event.name,
            prize_pool=event.prize_pool,
            start_date=event.start_date,
        )


class TournamentNotifications:
    """Subject holding the observers of tournament creation."""

    def __init__(self) -> None:
        self._observers: list[TournamentObserver] = []

    @property
    def observers(self) -> list[TournamentObserver]:
        return list(self._observers)

    def attach(self, observer: TournamentObserver) -> None:
        self._observers.append(observer)

    def detach(self, observer: TournamentObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def notify_created(self, tournament: Tournament) -> None:
        """
        Notify every observer in attach order.

        The tournament is already committed when this runs, so an observer
        failure is logged and the remaining observers still run.
        """
        event = TournamentCreatedEvent.from_tournament(tournament)
        for observer in self._observers:
            try:
                observer.on_tournament_created(event)
            except Exception:
                logger.exception(
                    "Tournament observer failed",
                    observer=type(observer).__name__,
                    tournament=event.name,
                )
