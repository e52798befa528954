"""
Unit Tests for request schemas
"""
import pytest
from datetime import date
from pydantic import ValidationError

from app.models.document import DocumentStatus
from app.schemas.document import DocumentCreate, DocumentStatusUpdate
from app.schemas.internship import InternshipCreate, ApplicationCreate
from app.schemas.tech_session import TechSessionCreate


def internship_fields(**overrides):
    fields = {
        'title': 'Backend Intern',
        'company': 'Acme Corp',
        'location': 'Remote',
        'duration': '3 months',
        'stipend': '10000',
        'deadline': date(2030, 1, 31),
        'skills': ['Python'],
        'description': 'APIs',
        'internship_type': 'Full-time',
        'category': 'Data Science',
    }
    fields.update(overrides)
    return fields


class TestInternshipCreate:

    def test_skills_are_stripped(self):
        schema = InternshipCreate(**internship_fields(skills=[' Python ', '', 'SQL']))

        assert schema.skills == ['Python', 'SQL']

    def test_blank_skills_rejected(self):
        with pytest.raises(ValidationError):
            InternshipCreate(**internship_fields(skills=['  ']))

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            InternshipCreate(**internship_fields(category='Astrology'))


class TestApplicationCreate:

    def test_short_phone_rejected(self):
        with pytest.raises(ValidationError):
            ApplicationCreate(phone='12345', semester='5', degree_program='BCA')

    def test_resume_is_optional_at_schema_level(self):
        schema = ApplicationCreate(phone='9876543210', semester='5', degree_program='BCA')

        assert schema.resume_path is None


class TestDocumentSchemas:

    def test_status_parsed_to_enum(self):
        update = DocumentStatusUpdate(status='under_review')

        assert update.status == DocumentStatus.UNDER_REVIEW

    def test_null_status_rejected(self):
        with pytest.raises(ValidationError):
            DocumentStatusUpdate(status=None)

    def test_empty_file_path_rejected(self):
        with pytest.raises(ValidationError):
            DocumentCreate(doc_type='attendance', file_path='', file_name='a.pdf')


class TestTechSessionCreate:

    def test_defaults(self):
        schema = TechSessionCreate(
            title='Docker basics',
            description='Containers',
            date='2030-02-01T10:00:00',
            start_time='10:00',
            end_time='11:00',
            location='Lab 1'
        )

        assert schema.capacity == 30
        assert schema.category.value == 'other'

    def test_bad_time_format(self):
        with pytest.raises(ValidationError):
            TechSessionCreate(
                title='Docker basics',
                description='Containers',
                date='2030-02-01T10:00:00',
                start_time='10am',
                end_time='11:00',
                location='Lab 1'
            )
