import pytest
from jose import jwt

from brain_backend.api.errors import InvalidToken, MissingToken
from brain_backend.api.security import TokenService, make_password_context


def test_issue_and_verify():
    service = TokenService("s3cret")
    token = service.issue("user-1")
    assert service.verify(token) == "user-1"

def test_token_has_no_expiry():
    token = TokenService("s3cret").issue("user-1")
    claims = jwt.get_unverified_claims(token)
    assert claims == {"id": "user-1"}

@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token(token):
    with pytest.raises(MissingToken):
        TokenService("s3cret").verify(token)

def test_wrong_secret_and_garbage():
    token = TokenService("s3cret").issue("user-1")
    with pytest.raises(InvalidToken):
        TokenService("different").verify(token)
    with pytest.raises(InvalidToken):
        TokenService("s3cret").verify("abc.def.ghi")

def test_token_without_id_claim():
    token = jwt.encode({"sub": "user-1"}, "s3cret", algorithm="HS256")
    with pytest.raises(InvalidToken):
        TokenService("s3cret").verify(token)

def test_secret_required():
    with pytest.raises(ValueError):
        TokenService("")

def test_plaintext_password_context():
    ctx = make_password_context("plaintext")
    assert ctx.hash("Sup3r!Secret") == "Sup3r!Secret"
    assert ctx.verify("Sup3r!Secret", "Sup3r!Secret")
    assert not ctx.verify("Sup3r!Secreu", "Sup3r!Secret")
