from utils.logger import sanitize_log_data

def test_secret_redaction():
    data = {"email": "user@example.com", "stripe_secret": "sk_test_123456789"}
    sanitized = sanitize_log_data(data)

    assert sanitized["email"] == "user@example.com"
    assert sanitized["stripe_secret"] == "***REDACTED***"


def test_session_id_partial_redaction():
    data = {"session_id": "cs_test_a1b2c3d4e5f6g7h8"}
    sanitized = sanitize_log_data(data)

    assert sanitized["session_id"] == "cs_test_..."
    assert "a1b2c3" not in sanitized["session_id"]


def test_token_partial_redaction():
    data = {"access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.long_token_here"}
    sanitized = sanitize_log_data(data)

    assert len(sanitized["access_token"]) == 11
    assert sanitized["access_token"].endswith("...")
    assert "long_token_here" not in sanitized["access_token"]


def test_nested_dict_sanitization():
    data = {"headers": {"authorization": "Bearer abc", "accept": "application/json"}}
    sanitized = sanitize_log_data(data)

    assert sanitized["headers"]["authorization"] == "***REDACTED***"
    assert sanitized["headers"]["accept"] == "application/json"


def test_input_not_modified():
    data = {"password": "hunter22"}
    sanitize_log_data(data)

    assert data["password"] == "hunter22"


def test_non_sensitive_data_unchanged():
    data = {"orderId": "o1", "buyerEmail": "test@example.com", "role": "admin"}
    sanitized = sanitize_log_data(data)

    assert sanitized == data
