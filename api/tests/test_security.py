import jobly.core.security as security


def test_role_resolution_reads_app_metadata_role() -> None:
    assert security._resolve_human_role({"id": "admin-1", "app_metadata": {"role": "admin"}}) == "admin"


def test_role_resolution_ignores_user_metadata_for_elevated_roles() -> None:
    role = security._resolve_human_role(
        {
            "id": "user-1",
            "app_metadata": {},
            "user_metadata": {"role": "admin"},
        }
    )
    assert role == "user"


def test_role_resolution_supports_app_metadata_roles_array() -> None:
    role = security._resolve_human_role({"id": "admin-1", "app_metadata": {"roles": ["user", "admin"]}})
    assert role == "admin"


def test_role_resolution_defaults_unknown_role_to_user() -> None:
    assert security._resolve_human_role({"id": "x", "app_metadata": {"role": "superuser"}}) == "user"
