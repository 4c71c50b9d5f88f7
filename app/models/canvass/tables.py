"""Canvass tables - mohallas, households, voters, influencers.

No foreign keys: dangling references are tolerated and reported by analytics.
"""

MOHALLA_DDL = """
CREATE TABLE IF NOT EXISTS mohalla (
    id VARCHAR PRIMARY KEY,
    name VARCHAR,
    parent_ward_id VARCHAR
)
"""

HOUSEHOLD_DDL = """
CREATE TABLE IF NOT EXISTS household (
    id VARCHAR PRIMARY KEY,
    mohalla_id VARCHAR,
    surveyed BOOLEAN DEFAULT FALSE,
    sentiment VARCHAR,
    last_surveyed_at TIMESTAMP,
    head_name VARCHAR,
    influence_level INTEGER DEFAULT 0
)
"""

VOTER_DDL = """
CREATE TABLE IF NOT EXISTS enhanced_voter (
    id VARCHAR PRIMARY KEY,
    household_id VARCHAR,
    present BOOLEAN DEFAULT TRUE,
    current_stance VARCHAR,
    turnout_propensity VARCHAR,
    tagged_by_influencer BOOLEAN DEFAULT FALSE,
    transport_needed BOOLEAN DEFAULT FALSE,
    away_status BOOLEAN DEFAULT FALSE,
    name VARCHAR
)
"""

INFLUENCER_DDL = """
CREATE TABLE IF NOT EXISTS influencer (
    id VARCHAR PRIMARY KEY,
    current_stance VARCHAR,
    can_be_influenced BOOLEAN DEFAULT FALSE,
    name VARCHAR,
    estimated_vote_control INTEGER DEFAULT 0
)
"""

CANVASS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_household_mohalla ON household(mohalla_id)",
    "CREATE INDEX IF NOT EXISTS idx_voter_household ON enhanced_voter(household_id)",
]
