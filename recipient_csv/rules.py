"""
Fixed parsing rules.

This file exists to make non-goals explicit and enforceable.
"""

DELIMITER = ","  # no dialect sniffing
QUOTE = '"'

NAME_COLUMN = "name"
CERTIFICATION_ID_COLUMN = "certification_id"
EMAIL_COLUMN = "email"

REQUIRED_COLUMNS = (NAME_COLUMN, CERTIFICATION_ID_COLUMN, EMAIL_COLUMN)

TEMPLATE_FILENAME = "recipients-template.csv"
TEMPLATE_ROWS = (
    ("John Doe", "CERT-001", "john.doe@example.com"),
    ("Jane Smith", "CERT-002", "jane.smith@example.com"),
    ("Bob Johnson", "CERT-003", "bob.johnson@example.com"),
)

CERTIFICATE_FILENAME = "certificate_{certification_id}.png"
