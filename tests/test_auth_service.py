import pytest

from services.auth_service import AuthService, ensure_default_admin
from services.demo_data import DEMO_USER_EMAIL, DEMO_USER_PASSWORD
from services.errors import ValidationError


def test_hash_e_verificacao_de_senha():
    hashed = AuthService.hash_password("segredo1")

    assert hashed != "segredo1"
    assert AuthService.verify_password("segredo1", hashed)
    assert not AuthService.verify_password("errada", hashed)


def test_create_user_e_authenticate(store):
    user = AuthService.create_user(store, " Gerente@Vidracaria.com ", "Paula", "senha456", "gerente")

    assert user["email"] == "gerente@vidracaria.com"
    assert user["role"] == "gerente"
    assert AuthService.authenticate(store, "GERENTE@vidracaria.com", "senha456")["id"] == user["id"]
    assert AuthService.authenticate(store, "gerente@vidracaria.com", "outra") is None
    assert AuthService.authenticate(store, "ninguem@vidracaria.com", "senha456") is None
    assert AuthService.authenticate(store, "", "") is None


def test_usuario_inativo_nao_autentica(store):
    user = AuthService.create_user(store, "func@vidracaria.com", "Rui", "senha789")
    store.update("usuarios", user["id"], {"ativo": False})

    assert AuthService.authenticate(store, "func@vidracaria.com", "senha789") is None


@pytest.mark.parametrize(
    "email, nome, senha, role",
    [
        ("sem-arroba", "Rui", "senha789", "funcionario"),
        ("rui@vidracaria.com", " ", "senha789", "funcionario"),
        ("rui@vidracaria.com", "Rui", "123", "funcionario"),
        ("rui@vidracaria.com", "Rui", "senha789", "dono"),
    ],
)
def test_create_user_invalido(store, email, nome, senha, role):
    with pytest.raises(ValidationError):
        AuthService.create_user(store, email, nome, senha, role)


def test_create_user_email_duplicado(store):
    AuthService.create_user(store, "rui@vidracaria.com", "Rui", "senha789")

    with pytest.raises(ValidationError):
        AuthService.create_user(store, "RUI@vidracaria.com", "Outro Rui", "senha789")


def test_ensure_default_admin(store):
    ensure_default_admin(store)
    ensure_default_admin(store)

    admins = store.fetch_all("usuarios")
    assert len(admins) == 1
    assert admins[0]["email"] == DEMO_USER_EMAIL
    assert AuthService.authenticate(store, DEMO_USER_EMAIL, DEMO_USER_PASSWORD) is not None
