"""
Management command to clear the parsed post content cache.

Useful after changing sanitize settings or plugins that affect how posts
render, since cached entries are only dropped when a post is edited.
"""

from django.core.management.base import BaseCommand

from posts.parsing import cache


class Command(BaseCommand):
    help = 'Clear cached parsed post content'

    def add_arguments(self, parser):
        parser.add_argument(
            '--pid',
            action='append',
            dest='pids',
            default=[],
            help='Only clear this post id (may be given more than once)',
        )

    def handle(self, *args, **options):
        pids = options.get('pids') or []

        if not pids:
            cache.clear()
            self.stdout.write(self.style.SUCCESS('Cleared all parsed post content'))
            return

        cleared = 0
        for pid in pids:
            if cache.invalidate(pid):
                cleared += 1
            else:
                self.stdout.write(self.style.WARNING(f'Post {pid} was not cached'))

        self.stdout.write(
            self.style.SUCCESS(f'Cleared {cleared} of {len(pids)} cached posts')
        )
