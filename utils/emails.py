def normalize_email(email: str) -> str:
    # Stored emails and verified token emails are compared in this form only
    return email.strip().lower()
