# app/models/__init__.py

from .contact_submission import ContactSubmission
from .job_application import JobApplication
