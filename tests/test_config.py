from recipient_csv.config import Settings


def test_explicit_cors_origins_are_kept():
    cfg = Settings(cors_origins=["https://certs.example.com"])
    assert cfg.cors_origins == ["https://certs.example.com"]


def test_cors_origins_default_from_env(monkeypatch):
    monkeypatch.setenv("RECIPIENT_CSV_CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    assert Settings().cors_origins == ["https://a.example.com", "https://b.example.com"]
