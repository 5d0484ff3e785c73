"""
Studio Dashboard Command.

Seeds the demo studio into a fresh registry and prints the dashboard:
projects under the status filter with their progress, then the most
urgent open tasks.
"""

from django.core.management.base import BaseCommand, CommandError

from application.factory import build_registry
from domain.shared.exceptions import DomainException
from domain.shared.value_objects import ALL, ProjectStatus
from infrastructure.demo_data import seed_demo_studio


class Command(BaseCommand):
    help = 'Print the studio dashboard for the demo dataset'

    def add_arguments(self, parser):
        parser.add_argument(
            '--status',
            type=str,
            default=ALL,
            choices=[ALL] + [s.value for s in ProjectStatus],
            help='Only list projects in this status'
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=None,
            help='Number of upcoming tasks to show (defaults to the configured limit)'
        )

    def handle(self, *args, **options):
        limit = options.get('limit')
        if limit is not None and limit < 0:
            raise CommandError('--limit cannot be negative')

        registry = build_registry()
        seed_demo_studio(registry)

        try:
            dashboard = registry.dashboard(status=options['status'], limit=limit)
        except DomainException as e:
            raise CommandError(f"{e.code}: {e.message}")

        heading = dashboard.status_filter.label if dashboard.status_filter else 'All'
        self.stdout.write(self.style.MIGRATE_HEADING(f'Projects ({heading})'))
        if not dashboard.projects:
            self.stdout.write('  No projects found.')
        for project in dashboard.projects:
            self.stdout.write(
                f'  {project.title} - {project.client_name} '
                f'[{project.status.label}] {project.progress}%'
            )

        self.stdout.write('')
        self.stdout.write(self.style.MIGRATE_HEADING('Upcoming tasks'))
        if not dashboard.upcoming:
            self.stdout.write('  Nothing scheduled.')
        for entry in dashboard.upcoming:
            due = entry.task.due_date.date().isoformat() if entry.task.due_date else 'no due date'
            line = (
                f'  [{entry.task.priority.value}] {entry.task.name} '
                f'({entry.project_title}, due {due})'
            )
            if entry.is_overdue:
                self.stdout.write(self.style.WARNING(line + ' OVERDUE'))
            else:
                self.stdout.write(line)

        self.stdout.write(self.style.SUCCESS(
            f'{len(dashboard.projects)} project(s), {len(dashboard.upcoming)} task(s) shown.'
        ))
