# ABOUTME: SQL DDL statements for the dreimetadaten metadata database.
# ABOUTME: One table for shared recording-unit fields, plus episode, part, chapter, and speaker tables.

SCHEMA_V1 = """
-- Shared attributes of episodes and parts, with the link set flattened in
CREATE TABLE einheit (
    id                      INTEGER PRIMARY KEY AUTOINCREMENT,
    titel                   TEXT,
    autor                   TEXT,
    hoerspielskriptautor    TEXT,
    beschreibung            TEXT,
    veroeffentlichungsdatum TEXT,
    link_json               TEXT,
    link_ffmetadata         TEXT,
    link_xld_log            TEXT,
    link_cover              TEXT,
    link_cover_itunes       TEXT,
    link_cover_kosmos       TEXT
);

CREATE TABLE folge (
    einheit_id INTEGER PRIMARY KEY REFERENCES einheit(id) ON DELETE CASCADE,
    sammlung   TEXT NOT NULL
               CHECK (sammlung IN ('serie', 'spezial', 'kurzgeschichten', 'die_dr3i')),
    position   INTEGER NOT NULL,
    nummer     INTEGER NOT NULL CHECK (nummer >= 0),
    UNIQUE (sammlung, position)
);

CREATE TABLE teil (
    einheit_id INTEGER PRIMARY KEY REFERENCES einheit(id) ON DELETE CASCADE,
    folge_id   INTEGER NOT NULL REFERENCES folge(einheit_id) ON DELETE CASCADE,
    position   INTEGER NOT NULL,
    teilnummer INTEGER NOT NULL CHECK (teilnummer >= 0),
    buchstabe  TEXT,
    UNIQUE (folge_id, position)
);

CREATE TABLE kapitel (
    einheit_id INTEGER NOT NULL REFERENCES einheit(id) ON DELETE CASCADE,
    position   INTEGER NOT NULL,
    titel      TEXT NOT NULL,
    start      INTEGER,
    "end"      INTEGER,
    PRIMARY KEY (einheit_id, position)
);

-- One row per speaker group; names stored as a JSON array
CREATE TABLE sprecher (
    einheit_id INTEGER NOT NULL REFERENCES einheit(id) ON DELETE CASCADE,
    position   INTEGER NOT NULL,
    namen      TEXT NOT NULL,
    PRIMARY KEY (einheit_id, position)
);

CREATE INDEX idx_folge_nummer ON folge(sammlung, nummer);
CREATE INDEX idx_teil_folge ON teil(folge_id);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
