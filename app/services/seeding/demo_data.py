"""Demo canvass data - a small village with five mohallas.

Households and influencers are fixed; voters are generated per household from
a seeded RNG, so the same seed always gives the same dataset.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from app.models.canvass import (
    Collection,
    EnhancedVoter,
    Household,
    Influencer,
    InfluencerStance,
    Mohalla,
    SentimentBucket,
    StanceBucket,
    TurnoutPropensity,
)

# Id prefixes of every demo record, per collection.
DEMO_PREFIXES: dict[Collection, str] = {
    Collection.MOHALLAS: "moh-",
    Collection.HOUSEHOLDS: "hh-",
    Collection.VOTERS: "v-",
    Collection.INFLUENCERS: "inf-",
}

DEMO_SURVEY_DATE = datetime(2026, 1, 15, tzinfo=timezone.utc)
WARD_ID = "gp-001"

_MOHALLAS = [
    ("moh-001", "Purab Tola"),
    ("moh-002", "Harijan Basti"),
    ("moh-003", "Yadav Mohalla"),
    ("moh-004", "Brahmin Tola"),
    ("moh-005", "Naya Basti"),
]

_F, _D, _U = SentimentBucket.FAVORABLE, SentimentBucket.DICEY, SentimentBucket.UNFAVORABLE

# (mohalla, head of family, influence level, sentiment, voters)
_HOUSEHOLDS = [
    # Purab Tola
    ("moh-001", "Rajendra Singh", 5, _F, 5),
    ("moh-001", "Vijay Singh", 3, _F, 4),
    ("moh-001", "Pradeep Singh", 2, _D, 3),
    ("moh-001", "Suresh Sharma", 4, _F, 4),
    ("moh-001", "Ramesh Singh", 2, _D, 5),
    ("moh-001", "Manoj Kumar", 3, _F, 3),
    ("moh-001", "Bhagwan Singh", 4, _U, 6),
    ("moh-001", "Anil Singh", 2, _F, 4),
    ("moh-001", "Dinesh Verma", 2, _D, 3),
    ("moh-001", "Govind Prasad", 3, _F, 4),
    ("moh-001", "Shyam Singh", 2, _F, 3),
    ("moh-001", "Hari Prasad", 1, _D, 4),
    # Harijan Basti
    ("moh-002", "Ram Prasad", 4, _F, 4),
    ("moh-002", "Sukhdev", 2, _F, 5),
    ("moh-002", "Lakhan Lal", 3, _F, 4),
    ("moh-002", "Munna Lal", 1, _D, 3),
    ("moh-002", "Jagdish", 2, _F, 4),
    ("moh-002", "Balram", 3, _D, 5),
    ("moh-002", "Santosh Kumar", 4, _F, 3),
    ("moh-002", "Pappu", 1, _F, 4),
    ("moh-002", "Chhote Lal", 1, _D, 3),
    ("moh-002", "Rajesh Kumar", 2, _F, 4),
    ("moh-002", "Bihari Lal", 2, _F, 3),
    ("moh-002", "Kallu", 1, _D, 4),
    ("moh-002", "Nanhe Lal", 1, _F, 3),
    ("moh-002", "Dharam Veer", 3, _U, 4),
    ("moh-002", "Ashok Kumar", 2, _F, 4),
    # Yadav Mohalla
    ("moh-003", "Ramveer Yadav", 5, _U, 6),
    ("moh-003", "Shivpal Yadav", 4, _U, 5),
    ("moh-003", "Pappu Yadav", 2, _D, 4),
    ("moh-003", "Munna Yadav", 2, _D, 3),
    ("moh-003", "Balram Yadav", 3, _U, 4),
    ("moh-003", "Chotelal Yadav", 1, _D, 4),
    ("moh-003", "Rampal Yadav", 2, _F, 5),
    ("moh-003", "Guddu Yadav", 1, _D, 3),
    ("moh-003", "Karan Yadav", 2, _D, 4),
    ("moh-003", "Suraj Yadav", 2, _F, 4),
    # Brahmin Tola
    ("moh-004", "Pt. Rameshwar", 5, _F, 5),
    ("moh-004", "Pt. Shivnath", 4, _F, 4),
    ("moh-004", "Pt. Girish", 3, _F, 3),
    ("moh-004", "Pt. Mahesh", 2, _D, 4),
    ("moh-004", "Pt. Dinesh", 3, _F, 4),
    ("moh-004", "Pt. Suresh", 1, _F, 3),
    ("moh-004", "Pt. Vikas", 2, _D, 5),
    ("moh-004", "Pt. Rajan", 2, _F, 4),
    # Naya Basti
    ("moh-005", "Raju Maurya", 3, _F, 4),
    ("moh-005", "Sanjay Gupta", 4, _F, 5),
    ("moh-005", "Mohan Saini", 2, _D, 3),
    ("moh-005", "Deepak Kashyap", 2, _F, 4),
    ("moh-005", "Ajay Nishad", 1, _D, 3),
    ("moh-005", "Pintu Kumar", 2, _F, 4),
    ("moh-005", "Bablu Pal", 1, _D, 3),
    ("moh-005", "Vipin Chauhan", 3, _U, 4),
    ("moh-005", "Sunny Patel", 2, _F, 4),
    ("moh-005", "Rakesh Rajput", 3, _D, 4),
]

# (name, stance, can be influenced, vote control, families influenced)
_INFLUENCERS = [
    ("Rajendra Singh (Ex-Pradhan)", "Supportive", False, 25, (1, 2, 4, 38, 39)),
    ("Ramveer Yadav", "Opposed", False, 30, (28, 29, 30, 31, 32)),
    ("Pt. Rameshwar Tiwari", "Supportive", False, 20, (38, 39, 40, 41, 42)),
    ("Ram Prasad", "Supportive", False, 35, (13, 14, 15, 17, 19)),
    ("Sanjay Gupta", "Supportive", True, 15, (47, 46, 49, 6)),
    ("Bhagwan Singh", "Opposed", True, 18, (7, 3, 5)),
    ("Santosh Kumar", "Neutral", True, 12, (19, 27, 46, 51)),
    ("Vipin Chauhan", "Opposed", True, 10, (53, 55, 48)),
]

_FIRST_NAMES = ["Ram", "Shyam", "Mohan", "Sohan", "Raju", "Sunita", "Geeta", "Sita", "Radha", "Meera", "Kamla", "Asha"]


@dataclass(frozen=True)
class DemoDataset:
    mohallas: tuple[Mohalla, ...]
    households: tuple[Household, ...]
    voters: tuple[EnhancedVoter, ...]
    influencers: tuple[Influencer, ...]

    def records(self, collection: Collection) -> tuple:
        return {
            Collection.MOHALLAS: self.mohallas,
            Collection.HOUSEHOLDS: self.households,
            Collection.VOTERS: self.voters,
            Collection.INFLUENCERS: self.influencers,
        }[collection]

    def summary(self) -> dict:
        sentiments = [h.sentiment for h in self.households]
        return {
            "mohallas": len(self.mohallas),
            "households": len(self.households),
            "voters": len(self.voters),
            "influencers": len(self.influencers),
            "favorable": sentiments.count(SentimentBucket.FAVORABLE),
            "dicey": sentiments.count(SentimentBucket.DICEY),
            "unfavorable": sentiments.count(SentimentBucket.UNFAVORABLE),
        }


def _hh_id(n: int) -> str:
    return f"hh-{n:03d}"


def _stance(rng: random.Random, sentiment: SentimentBucket, is_head: bool) -> StanceBucket:
    """Voter stance drawn from the family's sentiment."""
    roll = rng.random()
    if sentiment == SentimentBucket.FAVORABLE:
        if is_head or roll < 0.5:
            return StanceBucket.CONFIRMED
        return StanceBucket.LIKELY if roll < 0.8 else StanceBucket.SWING
    if sentiment == SentimentBucket.DICEY:
        if roll < 0.3:
            return StanceBucket.LIKELY
        if roll < 0.7:
            return StanceBucket.SWING
        return StanceBucket.UNKNOWN if roll < 0.85 else StanceBucket.OPPOSITION
    if is_head or roll < 0.4:
        return StanceBucket.OPPOSITION
    return StanceBucket.SWING if roll < 0.7 else StanceBucket.UNKNOWN


def build_demo_dataset(seed: int, surveyed_at: datetime = DEMO_SURVEY_DATE) -> DemoDataset:
    """Build the demo village. Survey dates fall in the 30 days before ``surveyed_at``."""
    rng = random.Random(seed)

    mohallas = tuple(Mohalla(id=mid, name=name, parent_ward_id=WARD_ID) for mid, name in _MOHALLAS)

    tagged_households = {_hh_id(n) for *_, families in _INFLUENCERS for n in families}

    households, voters = [], []
    voter_no = 1
    for n, (mohalla_id, head, influence, sentiment, size) in enumerate(_HOUSEHOLDS, start=1):
        hh_id = _hh_id(n)
        households.append(
            Household(
                id=hh_id,
                mohalla_id=mohalla_id,
                surveyed=True,
                sentiment=sentiment,
                last_surveyed_at=surveyed_at - timedelta(days=rng.randint(0, 30)),
                head_name=head,
                influence_level=influence,
            )
        )
        surname = head.split()[-1]
        for i in range(size):
            is_head = i == 0
            elderly = i >= 2 and rng.random() < 0.15
            present = rng.random() > 0.15
            if elderly:
                turnout = TurnoutPropensity.LOW
            else:
                turnout = TurnoutPropensity.HIGH if rng.random() > 0.3 else TurnoutPropensity.MEDIUM
            voters.append(
                EnhancedVoter(
                    id=f"v-{voter_no:03d}",
                    household_id=hh_id,
                    present=present,
                    current_stance=_stance(rng, sentiment, is_head),
                    turnout_propensity=turnout,
                    tagged_by_influencer=hh_id in tagged_households,
                    transport_needed=elderly,
                    away_status=not present and rng.random() > 0.5,
                    name=head if is_head else f"{rng.choice(_FIRST_NAMES)} {surname}",
                )
            )
            voter_no += 1

    influencers = tuple(
        Influencer(
            id=f"inf-{n:03d}",
            current_stance=InfluencerStance.FAVORABLE if stance == "Supportive" else InfluencerStance(stance),
            can_be_influenced=convertible,
            name=name,
            estimated_vote_control=control,
        )
        for n, (name, stance, convertible, control, _) in enumerate(_INFLUENCERS, start=1)
    )

    return DemoDataset(
        mohallas=mohallas,
        households=tuple(households),
        voters=tuple(voters),
        influencers=influencers,
    )
