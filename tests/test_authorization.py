import base64
import hashlib
from urllib.parse import parse_qs, urlparse

from hosted_login import AuthorizeUrlGenerator, PKCEManager


def test_pkce_challenge_matches_verifier():
    pkce = PKCEManager()
    pair = pkce.generate_pkce()

    digest = hashlib.sha256(pair.verifier.encode("utf-8")).digest()
    expected = base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")
    assert pair.challenge == expected
    assert 43 <= len(pair.verifier) <= 128
    assert pkce.code_verifier == pair.verifier
    assert pkce.nonce


def test_clear_pkce():
    pkce = PKCEManager()
    pkce.generate_pkce()
    pkce.clear_pkce()
    assert pkce.code_verifier is None
    assert pkce.nonce is None


def test_authorize_url_parameters(config):
    pkce = PKCEManager()
    url = AuthorizeUrlGenerator(config, pkce).generate()

    parsed = urlparse(url)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://auth.example.com/oauth/authorize"

    params = {key: values[0] for key, values in parse_qs(parsed.query).items()}
    assert params["redirect_uri"] == config.callback_uri
    assert params["response_type"] == "code"
    assert params["client_id"] == "client-123"
    assert params["scope"] == "openid email profile"
    assert params["code_challenge_method"] == "S256"
    assert params["grant_type"] == "authorization_code"
    assert params["nonce"] == pkce.nonce

    digest = hashlib.sha256(pkce.code_verifier.encode("utf-8")).digest()
    assert params["code_challenge"] == base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")


def test_each_generate_starts_a_new_request(config):
    generator = AuthorizeUrlGenerator(config)
    first = generator.generate()
    first_verifier = generator.pkce.code_verifier
    second = generator.generate()

    assert first != second
    assert generator.pkce.code_verifier != first_verifier
