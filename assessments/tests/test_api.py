import uuid

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from assessments.models import ExamAttempt, Result, UserAnswer
from assessments.services import save_answer, start_attempt, submit_attempt
from cores.cache import get_exam_cache
from exams.models import Question
from .factories import make_exam, make_question, make_section, make_user


class ExamFlowAPITest(APITestCase):
    def setUp(self):
        get_exam_cache().backend.clear()
        self.user = make_user()
        self.client.force_authenticate(self.user)

        self.exam = make_exam(supports_hindi=True, pass_percentage=50)
        self.section = make_section(self.exam)
        self.single, self.single_options = make_question(
            self.section, options=(("2", True), ("3", False)), number=1, marks=2, negative_marks=0.5,
        )
        self.multiple, self.multiple_options = make_question(
            self.section, options=(("a", True), ("b", False), ("c", True)), number=2,
            type=Question.QuestionType.MULTIPLE,
        )
        self.numerical, _ = make_question(
            self.section, options=(("42", True),), number=3, type=Question.QuestionType.NUMERICAL,
        )

    def start(self, language="en"):
        response = self.client.post(
            reverse('start-exam', kwargs={'exam_id': self.exam.id}), {'language': language}, format='json',
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return response.data['attempt_id']

    def answer_url(self, attempt_id, question):
        return reverse('save-answer', kwargs={'attempt_id': attempt_id, 'question_id': question.id})

    def test_full_attempt(self):
        attempt_id = self.start()

        questions = self.client.get(
            reverse('attempt-questions', kwargs={'exam_id': self.exam.id, 'attempt_id': attempt_id})
        )
        self.assertEqual(questions.status_code, status.HTTP_200_OK)
        self.assertEqual(questions.data['language'], "en")
        self.assertEqual(len(questions.data['questions']), 3)
        self.assertNotIn('is_correct', questions.data['questions'][0]['options'][0])
        self.assertEqual(questions.data['sections'][0]['total_questions'], 3)

        multiple_ids = [str(self.multiple_options[2].id), str(self.multiple_options[0].id)]
        for question, payload in (
            (self.single, {'answer': str(self.single_options[0].id), 'time_taken': 10}),
            (self.multiple, {'answer': multiple_ids, 'markedForReview': True, 'timeTaken': 20}),
            (self.numerical, {'answer': "42.0"}),
        ):
            response = self.client.put(self.answer_url(attempt_id, question), payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_200_OK)

        review_marked = UserAnswer.objects.get(attempt_id=attempt_id, question=self.multiple)
        self.assertTrue(review_marked.marked_for_review)
        self.assertEqual(review_marked.time_taken, 20)

        submitted = self.client.post(reverse('submit-exam', kwargs={'attempt_id': attempt_id}))
        self.assertEqual(submitted.status_code, status.HTTP_200_OK)
        self.assertEqual(str(submitted.data['attempt_id']), attempt_id)

        result = Result.objects.get(id=submitted.data['result_id'])
        self.assertEqual(result.score, 4)
        self.assertEqual(result.percentage, 100)
        self.assertEqual(result.status, Result.Status.PASS)

        detail = self.client.get(reverse('result-by-attempt', kwargs={'attempt_id': attempt_id}))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(len(detail.data['section_wise_analysis']), 1)
        self.assertEqual(detail.data['section_wise_analysis'][0]['accuracy'], 100)

        # Result detail also resolves when given the attempt id
        by_attempt_id = self.client.get(reverse('result-detail', kwargs={'pk': attempt_id}))
        self.assertEqual(by_attempt_id.data['id'], str(result.id))

        review = self.client.get(reverse('result-review', kwargs={'result_id': result.id}))
        self.assertEqual(review.status_code, status.HTTP_200_OK)
        self.assertEqual([item['is_correct'] for item in review.data], [True, True, True])
        self.assertEqual(review.data[2]['correct_answer'], str(self.numerical.options.get().id))

    def test_second_submit_returns_conflict_message(self):
        attempt_id = self.start()
        url = reverse('submit-exam', kwargs={'attempt_id': attempt_id})
        self.client.post(url)

        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Exam already submitted"})
        self.assertEqual(Result.objects.count(), 1)

    def test_evaluation_failure_keeps_attempt_submitted(self):
        self.section.language = "hi"
        self.section.save()
        attempt_id = self.start()

        with self.assertLogs('cores.exceptions', level='ERROR'):
            response = self.client.post(reverse('submit-exam', kwargs={'attempt_id': attempt_id}))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"error": "No questions available for evaluation in selected language"})
        self.assertTrue(ExamAttempt.objects.get(id=attempt_id).is_submitted)
        self.assertFalse(Result.objects.exists())

    def test_save_after_submit_is_rejected(self):
        attempt_id = self.start()
        self.client.post(reverse('submit-exam', kwargs={'attempt_id': attempt_id}))

        response = self.client.put(
            self.answer_url(attempt_id, self.single), {'answer': str(self.single_options[0].id)}, format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Cannot save answer after exam submission"})

    def test_start_errors(self):
        bad_language = self.client.post(
            reverse('start-exam', kwargs={'exam_id': self.exam.id}), {'language': 'fr'}, format='json',
        )
        self.assertEqual(bad_language.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(bad_language.data, {"error": 'Invalid language. Must be "en" or "hi"'})

        missing = self.client.post(reverse('start-exam', kwargs={'exam_id': uuid.uuid4()}), {}, format='json')
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data, {"error": "Exam not found"})

        paid = make_exam(is_free=False, price=50)
        forbidden = self.client.post(reverse('start-exam', kwargs={'exam_id': paid.id}), {}, format='json')
        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(ExamAttempt.objects.filter(exam=paid).exists())

    def test_questions_of_someone_elses_attempt(self):
        attempt_id = self.start()
        self.client.force_authenticate(make_user("other"))

        response = self.client.get(
            reverse('attempt-questions', kwargs={'exam_id': self.exam.id, 'attempt_id': attempt_id})
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Exam attempt not found"})

    def test_invalid_numerical_answer(self):
        attempt_id = self.start()

        response = self.client.put(self.answer_url(attempt_id, self.numerical), {'answer': "forty"}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Answer must be a number"})

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        response = self.client.post(reverse('start-exam', kwargs={'exam_id': self.exam.id}), {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)


class ResultListAPITest(APITestCase):
    def setUp(self):
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def submit_attempt_on(self, title, correct):
        exam = make_exam(title=title)
        question, options = make_question(make_section(exam), options=(("yes", True), ("no", False)))
        attempt = start_attempt(exam.id, self.user)
        save_answer(attempt.id, question.id, self.user, value=str(options[0 if correct else 1].id))
        return submit_attempt(attempt.id, self.user, get_exam_cache())[1]

    def test_list_and_stats(self):
        self.submit_attempt_on("Mock 1", correct=True)
        self.submit_attempt_on("Mock 2", correct=False)

        listing = self.client.get(reverse('result-list'))
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data['count'], 2)
        self.assertEqual({row['exam_title'] for row in listing.data['results']}, {"Mock 1", "Mock 2"})

        stats = self.client.get(reverse('result-stats'))
        self.assertEqual(stats.data, {"exams_taken": 2, "days_active": 1, "avg_score": 50.0})

    def test_results_of_other_users_are_hidden(self):
        result = self.submit_attempt_on("Mock", correct=True)
        self.client.force_authenticate(make_user("other"))

        self.assertEqual(self.client.get(reverse('result-list')).data['count'], 0)
        response = self.client.get(reverse('result-detail', kwargs={'pk': result.id}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Result not found"})
