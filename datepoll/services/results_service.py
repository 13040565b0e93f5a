"""
Results aggregation: per-date tallies and the participant response matrix
"""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from datepoll.core.errors import NotFoundError
from datepoll.services.repositories import EventDateRepo, EventRepo, ParticipantRepo, ResponseRepo
from datepoll.utils.responses import isoformat_utc
from datepoll.utils.security import is_valid_public_id


def rank_dates(dates: List[Dict]) -> List[Dict]:
    """Best options first: most ``yes`` answers, ties to the earlier display order"""
    return sorted(dates, key=lambda d: (-d["yes_count"], d["display_order"]))


def best_date_id(dates: List[Dict]) -> Optional[int]:
    ranked = rank_dates(dates)
    if ranked and ranked[0]["yes_count"] > 0:
        return ranked[0]["id"]
    return None


class ResultsService:
    """Service for aggregated poll results"""

    @staticmethod
    def get_results(event_id: str, db: Session) -> Dict:
        if not is_valid_public_id(event_id):
            raise NotFoundError()
        event = EventRepo.get_live(db, event_id)
        if not event:
            raise NotFoundError()

        dates = EventDateRepo.list_for_event(db, event_id)
        participants = ParticipantRepo.list_for_event(db, event_id)
        responses = ResponseRepo.list_for_participants(db, [p.id for p in participants])

        counts = {d.id: {"yes": 0, "maybe": 0, "no": 0} for d in dates}
        matrix: Dict[int, Dict[str, str]] = {p.id: {} for p in participants}
        for response in responses:
            # Rows for dates removed by an edit are ignored
            if response.event_date_id in counts:
                counts[response.event_date_id][response.status] += 1
                matrix[response.participant_id][str(response.event_date_id)] = response.status

        dates_with_counts = [
            {
                "id": d.id,
                "start_datetime": isoformat_utc(d.start_datetime),
                "end_datetime": isoformat_utc(d.end_datetime),
                "is_all_day": d.is_all_day,
                "display_order": d.display_order,
                "yes_count": counts[d.id]["yes"],
                "maybe_count": counts[d.id]["maybe"],
                "no_count": counts[d.id]["no"],
            }
            for d in dates
        ]

        return {
            "event": {
                "id": event.id,
                "title": event.title,
                "description": event.description,
                "location": event.location,
                "timezone": event.timezone,
            },
            "dates": dates_with_counts,
            "participants": [
                {
                    "id": p.id,
                    "name": p.name,
                    "comment": p.comment,
                    "responses": matrix[p.id],
                }
                for p in participants
            ],
            "totalParticipants": len(participants),
            "bestDateId": best_date_id(dates_with_counts),
        }
