from app.services.image_host import ImageHostError, UploadedImage, upload_image, delete_image
from app.services.ai_relay import (
    AIServiceError,
    enhance_professional_summary,
    enhance_job_description,
    extract_resume_data,
)
from app.services.resume_editor import ResumeEditor
from app.services.preview import render_resume

__all__ = [
    "ImageHostError",
    "UploadedImage",
    "upload_image",
    "delete_image",
    "AIServiceError",
    "enhance_professional_summary",
    "enhance_job_description",
    "extract_resume_data",
    "ResumeEditor",
    "render_resume",
]
