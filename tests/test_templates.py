from signup_backend.core.templates import templates

from tests.conftest import ADMIN_PATH


class TestAdminTemplates:
    def test_admin_path_available_to_pages(self):
        html = templates.env.get_template("admin/panel.html").render()
        assert f'href="{ADMIN_PATH}/export"' in html
        assert f'href="{ADMIN_PATH}/admin-styles.css"' in html

    def test_setup_error_is_escaped(self):
        html = templates.env.get_template("admin/setup.html").render(
            error="<script>alert(1)</script>", min_length=8
        )
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
