"""
Test template selection and HTML rendering of resume previews.
"""
import pytest
from fastapi import status

from app.services.preview import normalize_for_render, render_resume, resolve_template


class TestTemplateSelection:

    @pytest.mark.parametrize("template", ["classic", "modern", "minimal", "minimal-image"])
    def test_known_templates(self, template):
        assert resolve_template(template) == template

    @pytest.mark.parametrize("template", [None, "", "fancy", "Modern"])
    def test_unknown_falls_back_to_classic(self, template):
        assert resolve_template(template) == "classic"


class TestRender:

    @pytest.mark.parametrize("template", ["classic", "modern", "minimal", "minimal-image"])
    def test_each_template_renders_content(self, sample_resume_data, template):
        html = render_resume(sample_resume_data, template=template)

        assert f'class="template-{template}"' in html
        assert "Jane Doe" in html
        assert "Acme" in html
        assert "State University" in html
        assert "#10b981" in html

    def test_print_styles_pin_letter_page(self, sample_resume_data):
        html = render_resume(sample_resume_data)
        assert "size: letter" in html
        assert "@media print" in html
        assert 'id="resume-preview"' in html

    def test_uses_stored_template(self, sample_resume_data):
        assert 'class="template-modern"' in render_resume(sample_resume_data)

    def test_escapes_user_content(self):
        html = render_resume({"professional_summary": "<script>alert(1)</script>"})
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html

    def test_invalid_accent_color_replaced(self):
        html = render_resume({"accent_color": "red;}</style>"})
        assert "#3b82f6" in html
        assert "red;}" not in html

    def test_malformed_sections_render_empty(self):
        data = {
            "skills": "Python, Spark",
            "experience": {"company": "not in a list"},
            "education": ["a string entry"],
            "personal_info": "nobody",
        }
        view = normalize_for_render(data)

        assert view["skills"] == ["Python", "Spark"]
        assert view["experience"] == []
        assert view["education"] == []
        assert view["personal_info"]["full_name"] == ""
        assert "Python" in render_resume(data)


class TestPreviewEndpoints:

    def test_owner_preview(self, test_client, auth_headers, create_resume):
        resume = create_resume(auth_headers, "Mine")
        response = test_client.get(f"/api/resumes/preview/{resume['id']}", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/html")
        assert 'class="template-classic"' in response.text

    def test_template_override(self, test_client, auth_headers, create_resume):
        resume = create_resume(auth_headers)
        response = test_client.get(
            f"/api/resumes/preview/{resume['id']}?template=minimal",
            headers=auth_headers,
        )
        assert 'class="template-minimal"' in response.text

    def test_foreign_preview_not_found(self, test_client, auth_headers, other_auth_headers, create_resume):
        resume = create_resume(auth_headers)
        response = test_client.get(f"/api/resumes/preview/{resume['id']}", headers=other_auth_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_public_preview_gated_by_flag(self, test_client, auth_headers, create_resume):
        resume = create_resume(auth_headers)
        assert test_client.get(f"/api/resumes/public/{resume['id']}/preview").status_code == 404

        test_client.put(
            "/api/resumes/update",
            data={"resumeId": str(resume["id"]), "resumeData": '{"public": true}'},
            headers=auth_headers,
        )
        response = test_client.get(f"/api/resumes/public/{resume['id']}/preview")
        assert response.status_code == status.HTTP_200_OK
        assert "size: letter" in response.text
