from django.core.management.base import BaseCommand

from cores.cache import get_exam_cache
from assessments.services.evaluation import evaluate_pending_attempts, pending_attempts


class Command(BaseCommand):
    help = 'Evaluates submitted attempts that have no result (e.g. after an evaluation failure)'

    def add_arguments(self, parser):
        parser.add_argument('--limit', type=int, default=None, help='Maximum number of attempts to process')
        parser.add_argument('--dry-run', action='store_true', help='List the attempts without evaluating them')

    def handle(self, *args, **options):
        limit = options['limit']

        if options['dry_run']:
            attempts = pending_attempts()
            if limit:
                attempts = attempts[:limit]
            for attempt in attempts:
                self.stdout.write(f"{attempt.id}  exam={attempt.exam_id}  submitted_at={attempt.submitted_at}")
            return

        evaluated, failed = evaluate_pending_attempts(get_exam_cache(), limit=limit)

        self.stdout.write(self.style.SUCCESS(f"Evaluated {len(evaluated)} attempt(s)"))
        if failed:
            self.stdout.write(self.style.ERROR(f"Failed to evaluate {len(failed)} attempt(s): " + ", ".join(str(i) for i in failed)))
