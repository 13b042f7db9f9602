"""
MapleCEX reference risk database.

Records are listed by email and keyed in the table by the SHA-256 of that
email, so the table never exposes raw addresses as identifiers.

The last entry deliberately reuses alex.chen's passport number to model an
identity-theft case.
"""

from __future__ import annotations

from chimera_core.matching.identity import RecordTable, RiskRecord
from chimera_core.utils.hashing import email_key


REFERENCE_RECORDS = [
    {
        "identity": {
            "email": "alex.chen@gmail.com",
            "phone": "+1-555-0123",
            "country": "United States",
            "document_type": "Passport",
            "document_number": "US123456789",
        },
        "risk_tags": ["Velocity_Withdrawals", "Suspicious_Patterns"],
        "exact_flagged_date": "2023-12-10T16:45:00Z",
        "status": "BANNED",
        "investigation_notes": "Withdrew $50K in 24hrs, ignored KYC requests",
        "wallet_addresses": [
            "1BvBMSEYstWetqTFn5Au4m4GFg7xJaNVN2",
            "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4",
        ],
        "compliance_officer": "J.Smith",
        "internal_case_id": "RISK-2023-1247",
    },
    {
        "identity": {
            "email": "crypto.trader2024@protonmail.com",
            "phone": "+44-20-7946-0958",
            "country": "United Kingdom",
            "document_type": "Passport",
            "document_number": "GB987654321",
        },
        "risk_tags": ["Sanctions_List_Hit", "Multiple_Accounts", "VPN_Usage"],
        "exact_flagged_date": "2023-11-22T09:12:00Z",
        "status": "BLOCKED",
        "investigation_notes": "Matched OFAC sanctions list, used multiple identities",
        "wallet_addresses": ["3FupnQyrcbUH2cMjHjH2qEQgcBMKL9g7gy"],
        "compliance_officer": "M.Davis",
        "internal_case_id": "SANCTIONS-2023-0892",
    },
    {
        # no phone on file
        "identity": {
            "email": "fraud-user-1@email.com",
            "country": "Canada",
            "document_type": "Driver_License",
            "document_number": "CA-DL-4471902",
        },
        "risk_tags": ["High_Velocity_Withdrawals"],
        "exact_flagged_date": "2024-08-15T10:30:00Z",
        "status": "UNDER_REVIEW",
        "investigation_notes": "Multiple large withdrawals to new addresses",
        "wallet_addresses": ["bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq"],
        "compliance_officer": "A.Johnson",
        "internal_case_id": "VELOCITY-2024-0156",
    },
    {
        "identity": {
            "email": "sanctioned-user@email.com",
            "phone": "+7-495-555-0100",
            "country": "Russia",
            "document_type": "National_ID",
            "document_number": "RU4510998877",
        },
        "risk_tags": ["Sanctions_List_Hit", "Flagged_KYC"],
        "exact_flagged_date": "2023-05-20T18:00:00Z",
        "status": "BLOCKED",
        "investigation_notes": "Verified match on OFAC SDN list",
        "wallet_addresses": ["1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"],
        "compliance_officer": "K.Wilson",
        "internal_case_id": "OFAC-2023-0445",
    },
    {
        "identity": {
            "email": "maria.rodriguez@yahoo.com",
            "phone": "+34-91-555-0142",
            "country": "Spain",
            "document_type": "Passport",
            "document_number": "ES556677889",
        },
        "risk_tags": [],
        "status": "CLEAN",
        "investigation_notes": "Routine KYC refresh, no findings",
        "compliance_officer": "J.Smith",
        "internal_case_id": "KYC-2024-0311",
    },
    {
        "identity": {
            "email": "a.chen.trading@tutanota.com",
            "phone": "+1-555-0777",
            "country": "United States",
            "document_type": "Passport",
            "document_number": "US123456789",
        },
        "risk_tags": ["Identity_Theft", "Document_Fraud"],
        "exact_flagged_date": "2024-02-14T08:05:00Z",
        "status": "UNDER_REVIEW",
        "investigation_notes": "Passport number already registered to RISK-2023-1247",
        "wallet_addresses": ["bc1q9h7garjy8kqd4zfx2jv5e0wq6y3yq0nwn3d8mx"],
        "compliance_officer": "M.Davis",
        "internal_case_id": "IDFRAUD-2024-0027",
    },
]


DEMO_USERS = {
    "alex.chen@gmail.com": "High-risk user, previously banned for velocity withdrawals",
    "crypto.trader2024@protonmail.com": "Extreme risk, OFAC sanctions list hit",
    "maria.rodriguez@yahoo.com": "Clean user, no risk flags",
    "fraud-user-1@email.com": "Under review for high-velocity withdrawals",
    "sanctioned-user@email.com": "Blocked, verified OFAC sanctions match",
    "clean-user@example.com": "Not in the partner's risk database",
}


def load_reference_table() -> RecordTable:
    """Build the reference table, keyed by SHA-256 of each record's email."""
    return RecordTable({
        email_key(entry["identity"]["email"]): RiskRecord.from_dict(entry)
        for entry in REFERENCE_RECORDS
    })
