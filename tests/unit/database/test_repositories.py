"""
Tests for the record repositories.
"""

import unittest

import pytest

from database.models import Student, StudentStatus
from database.uow import store_uow
from tests import add_student, add_supervisor, make_test_database


@pytest.mark.db
class RepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.engine, self.session_factory = make_test_database()

    def tearDown(self):
        self.engine.dispose()


class TestRecordRepository(RepositoryTestCase):

    def test_create_assigns_id_and_timestamps(self):
        with store_uow(self.session_factory) as store:
            supervisor = store.supervisors.create(
                last_name="Dupont", first_name="Claire", email="claire@example.org",
                domains=["Médias"], max_quota=4,
            )
            self.assertTrue(supervisor.id)
            self.assertIsNotNone(supervisor.created_at)
            self.assertEqual(supervisor.created_at, supervisor.updated_at)
            self.assertEqual(supervisor.current_load, 0)
            self.assertTrue(supervisor.available)

    def test_create_ignores_unknown_and_immutable_fields(self):
        with store_uow(self.session_factory) as store:
            supervisor = store.supervisors.create(
                id="chosen-id", last_name="Dupont", first_name="Claire",
                email="claire@example.org", nickname="cd",
            )
            self.assertNotEqual(supervisor.id, "chosen-id")

    def test_update_merges_fields(self):
        supervisor_id = add_supervisor(self.session_factory, last_name="Dupont", max_quota=4)

        with store_uow(self.session_factory) as store:
            before = store.supervisors.find_by_id(supervisor_id)
            created_at = before.created_at
            updated = store.supervisors.update(supervisor_id, {
                'max_quota': 6, 'id': 'other', 'created_at': None, 'unknown': 1,
            })
            self.assertEqual(updated.id, supervisor_id)
            self.assertEqual(updated.max_quota, 6)
            self.assertEqual(updated.last_name, "Dupont")
            self.assertEqual(updated.created_at, created_at)

    def test_update_missing_record(self):
        with store_uow(self.session_factory) as store:
            self.assertIsNone(store.supervisors.update("missing", {'max_quota': 2}))

    def test_find_and_delete(self):
        supervisor_id = add_supervisor(self.session_factory)

        with store_uow(self.session_factory) as store:
            self.assertIsNotNone(store.supervisors.find_by_id(supervisor_id))
            self.assertIsNone(store.supervisors.find_by_id(None))
            self.assertTrue(store.supervisors.delete(supervisor_id))
            self.assertFalse(store.supervisors.delete(supervisor_id))
            self.assertEqual(store.supervisors.count(), 0)

    def test_find_all_with_criteria(self):
        add_student(self.session_factory, status=StudentStatus.VALIDATED.value)
        add_student(self.session_factory)

        with store_uow(self.session_factory) as store:
            validated = store.students.find_all(Student.status == StudentStatus.VALIDATED.value)
            self.assertEqual(len(validated), 1)
            self.assertEqual(store.students.count(), 2)


class TestStudentRepository(RepositoryTestCase):

    def test_count_by_supervisor(self):
        p1 = add_supervisor(self.session_factory)
        p2 = add_supervisor(self.session_factory)
        add_student(self.session_factory, supervisor_id=p1)
        add_student(self.session_factory, supervisor_id=p1)
        add_student(self.session_factory, supervisor_id=p2)
        add_student(self.session_factory)

        with store_uow(self.session_factory) as store:
            self.assertEqual(store.students.count_by_supervisor(), {p1: 2, p2: 1})

    def test_search(self):
        p1 = add_supervisor(self.session_factory)
        add_student(self.session_factory, last_name="Martin", thesis_title="Les médias locaux",
                    supervisor_id=p1, current_stage="DEPOT_PLAN")
        add_student(self.session_factory, last_name="Bernard", thesis_title="Publicité et enfance")

        with store_uow(self.session_factory) as store:
            self.assertEqual([s.last_name for s in store.students.search(text="MARTIN")], ["Martin"])
            self.assertEqual([s.last_name for s in store.students.search(text="publicité")], ["Bernard"])
            self.assertEqual([s.last_name for s in store.students.search(stage="DEPOT_PLAN")], ["Martin"])
            self.assertEqual([s.last_name for s in store.students.search(supervisor_id=p1)], ["Martin"])
            self.assertEqual([s.last_name for s in store.students.search()], ["Bernard", "Martin"])

    def test_search_text_wildcards_are_literal(self):
        add_student(self.session_factory, last_name="Martin", thesis_title="Audience à 100%")
        add_student(self.session_factory, last_name="Bernard", thesis_title="Radio_locale")
        add_student(self.session_factory, last_name="Petit", thesis_title="Radio locale")

        with store_uow(self.session_factory) as store:
            self.assertEqual([s.last_name for s in store.students.search(text="%")], ["Martin"])
            self.assertEqual([s.last_name for s in store.students.search(text="o_l")], ["Bernard"])
            self.assertEqual(store.students.search(text="\\"), [])

    def test_find_by_email_is_case_insensitive(self):
        add_student(self.session_factory, email="lea@example.org")

        with store_uow(self.session_factory) as store:
            self.assertIsNotNone(store.students.find_by_email(" LEA@example.org "))


class TestSupervisorRepository(RepositoryTestCase):

    def test_search_by_availability_and_domain(self):
        add_supervisor(self.session_factory, last_name="Alpha", domains=["Journalisme", "Médias"])
        add_supervisor(self.session_factory, last_name="Beta", domains=["Sociologie"], available=False)

        with store_uow(self.session_factory) as store:
            self.assertEqual([s.last_name for s in store.supervisors.search(available=True)], ["Alpha"])
            self.assertEqual([s.last_name for s in store.supervisors.search(available=False)], ["Beta"])
            self.assertEqual([s.last_name for s in store.supervisors.search(domain="journal")], ["Alpha"])
            self.assertEqual(len(store.supervisors.search()), 2)

    def test_fill_rate_and_remaining_capacity(self):
        supervisor_id = add_supervisor(self.session_factory, max_quota=3, current_load=2)

        with store_uow(self.session_factory) as store:
            supervisor = store.supervisors.find_by_id(supervisor_id)
            self.assertEqual(supervisor.remaining_capacity, 1)
            self.assertEqual(supervisor.fill_rate, 67)


class TestWorkflowAndDocuments(RepositoryTestCase):

    def test_list_ordered_stages(self):
        with store_uow(self.session_factory) as store:
            store.stages.create(code="B", label="Second", position=2)
            store.stages.create(code="A", label="First", position=1)
            store.stages.create(code="C", label="Hidden", position=3, active=False)

        with store_uow(self.session_factory) as store:
            self.assertEqual([s.code for s in store.stages.list_ordered()], ["A", "B", "C"])
            self.assertEqual([s.code for s in store.stages.list_ordered(active_only=True)], ["A", "B"])
            self.assertEqual(store.stages.find_by_code("B").label, "Second")

    def test_documents_for_student(self):
        s1 = add_student(self.session_factory)
        s2 = add_student(self.session_factory)
        with store_uow(self.session_factory) as store:
            store.documents.create(student_id=s1, file_name="sujet.pdf")
            store.documents.create(student_id=s2, file_name="plan.pdf", doc_type="PLAN")

        with store_uow(self.session_factory) as store:
            docs = store.documents.find_by_student(s1)
            self.assertEqual([d.file_name for d in docs], ["sujet.pdf"])
            self.assertEqual(docs[0].doc_type, "AUTRE")
            self.assertEqual(store.documents.delete_for_student(s1), 1)
            self.assertEqual(store.documents.count(), 1)


class TestThesisRecordRepository(RepositoryTestCase):

    def add_theses(self):
        with store_uow(self.session_factory) as store:
            store.theses.create(title="Radio et proximité", author="Lambert", year=2022,
                                supervisor_name="Claire Dupont", domains=["Radio", "Médias"])
            store.theses.create(title="Le 100% numérique", author="Renard", year=2023,
                                supervisor_name="Marc Leroy", domains=["Numérique"],
                                summary="Presse et réseaux")
            store.theses.create(title="Affiches électorales", author="Colin", year=2023,
                                supervisor_name="Claire Dupont", domains=["Politique"])

    def test_newest_year_first(self):
        self.add_theses()

        with store_uow(self.session_factory) as store:
            self.assertEqual(
                [t.author for t in store.theses.search()],
                ["Colin", "Renard", "Lambert"],
            )

    def test_filters(self):
        self.add_theses()

        with store_uow(self.session_factory) as store:
            self.assertEqual([t.author for t in store.theses.search(year=2022)], ["Lambert"])
            self.assertEqual([t.author for t in store.theses.search(supervisor="dupont")], ["Colin", "Lambert"])
            self.assertEqual([t.author for t in store.theses.search(domain="média")], ["Lambert"])
            self.assertEqual([t.author for t in store.theses.search(text="réseaux")], ["Renard"])
            self.assertEqual([t.author for t in store.theses.search(text="COLIN")], ["Colin"])
            self.assertEqual([t.author for t in store.theses.search(text="%")], ["Renard"])


if __name__ == "__main__":
    unittest.main()
