from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from assessments.services import save_answer, start_attempt, submit_attempt
from assessments.tests.factories import make_exam, make_question, make_section, make_user
from cores.cache import exam_detail_key, exam_detail_prefix, get_exam_cache


class ExamDetailViewTest(APITestCase):
    def setUp(self):
        self.cache = get_exam_cache()
        self.cache.backend.clear()
        self.addCleanup(self.cache.backend.clear)

        self.user = make_user()
        self.exam = make_exam(title="Banking Prelims", supports_hindi=True)
        self.section = make_section(self.exam, "Reasoning", name_hi="तर्क")
        self.question, self.options = make_question(self.section, options=(("a", True), ("b", False)))
        self.url = reverse('exam-detail', kwargs={'pk': self.exam.id})

    def cached_detail(self, user_id=None):
        version = self.cache.version(exam_detail_prefix(self.exam.id))
        return self.cache.get(exam_detail_key(self.exam.id, user_id, version))

    def test_anonymous_detail_includes_pattern(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], "Banking Prelims")
        self.assertIsNone(response.data['attempts'])
        self.assertEqual(response.data['pattern']['sections'][0]['name_hi'], "तर्क")

    def test_unpublished_exam_is_not_found(self):
        hidden = make_exam(is_published=False)
        response = self.client.get(reverse('exam-detail', kwargs={'pk': hidden.id}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Exam not found"})

    def test_detail_is_served_from_cache(self):
        self.client.get(self.url)
        self.assertIsNotNone(self.cached_detail())

        self.exam.title = "Renamed"
        self.exam.save()
        response = self.client.get(self.url)

        self.assertEqual(response.data['title'], "Banking Prelims")

    def test_submission_invalidates_cached_detail(self):
        self.client.force_authenticate(self.user)
        attempt = start_attempt(self.exam.id, self.user)
        save_answer(attempt.id, self.question.id, self.user, value=str(self.options[0].id))

        self.assertEqual(self.client.get(self.url).data['attempts'], 1)
        self.assertIsNotNone(self.cached_detail(self.user.pk))

        submit_attempt(attempt.id, self.user, self.cache)

        self.assertIsNone(self.cached_detail(self.user.pk))
        start_attempt(self.exam.id, self.user)
        self.assertEqual(self.client.get(self.url).data['attempts'], 2)
