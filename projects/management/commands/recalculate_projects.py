# projects/management/commands/recalculate_projects.py

from django.core.management.base import BaseCommand, CommandError

from messaging.commands import RecalculateProject
from messaging.dispatcher import CommandDispatcher
from projects.repository import ProjectRepository


class Command(BaseCommand):
    help = 'Recomputes progress and status for every project, or only for the given project ids.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--project',
            action='append',
            dest='project_ids',
            default=[],
            metavar='UUID',
            help='Only recalculate this project. May be repeated.',
        )

    def handle(self, *args, **options):
        repo = ProjectRepository()
        dispatcher = CommandDispatcher()

        if options['project_ids']:
            project_ids = options['project_ids']
        else:
            project_ids = [project.id for project in repo.list_all()]

        if not project_ids:
            self.stdout.write(self.style.WARNING("No projects to recalculate."))
            return

        missing = 0
        for project_id in project_ids:
            aggregate = dispatcher.dispatch(RecalculateProject(project_id))
            if aggregate is None:
                missing += 1
                self.stderr.write(self.style.WARNING(f" [!] Project {project_id} not found, skipped."))
                continue
            self.stdout.write(f" [x] {project_id}: progress={aggregate.progress} status={aggregate.status}")

        recalculated = len(project_ids) - missing
        if recalculated == 0:
            raise CommandError("None of the given projects exist.")
        self.stdout.write(self.style.SUCCESS(f"Recalculated {recalculated} project(s)."))
