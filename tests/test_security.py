from user_directory.core.security import PasswordHasher


def test_hash_is_not_plaintext(hasher):
    hashed = hasher.hash("securepassword")
    assert hashed != "securepassword"
    assert "securepassword" not in hashed


def test_hash_is_salted(hasher):
    assert hasher.hash("securepassword") != hasher.hash("securepassword")


def test_verify(hasher):
    hashed = hasher.hash("securepassword")
    assert hasher.verify("securepassword", hashed)
    assert not hasher.verify("wrongpassword", hashed)


def test_verify_rejects_garbage_hash(hasher):
    assert not hasher.verify("securepassword", "not-a-bcrypt-hash")


def test_work_factor_is_encoded_in_hash():
    hashed = PasswordHasher(rounds=5).hash("securepassword")
    assert hashed.startswith("$2b$05$")
