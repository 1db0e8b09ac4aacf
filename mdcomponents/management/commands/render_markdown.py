"""
Management command to render a markdown document with components.

Reads the document from a file (or stdin with ``-``), renders it with the
components configured in ``settings.MDCOMPONENTS`` and writes the HTML to
stdout or to ``--output``. Useful for checking component templates without
going through a view.
"""

import sys
from pathlib import Path

from bs4 import BeautifulSoup
from django.core.management.base import BaseCommand, CommandError

from mdcomponents.markdown.renderer import render_markdown


class Command(BaseCommand):
    help = 'Render a markdown file, resolving component tags, and print the HTML'

    def add_arguments(self, parser):
        parser.add_argument(
            'path',
            help='Markdown file to render, or - to read from stdin',
        )
        parser.add_argument(
            '--output',
            '-o',
            help='Write HTML to this file instead of stdout',
        )
        parser.add_argument(
            '--pretty',
            action='store_true',
            help='Indent the HTML output for reading',
        )
        parser.add_argument(
            '--fail-on-error',
            action='store_true',
            help='Exit with an error if any component failed to render',
        )

    def handle(self, *args, **options):
        path = options['path']
        output = options.get('output')
        fail_on_error = options.get('fail_on_error')
        pretty = options.get('pretty')

        if path == '-':
            text = sys.stdin.read()
        else:
            try:
                text = Path(path).read_text(encoding='utf-8')
            except OSError as e:
                raise CommandError(f'Cannot read {path}: {e}') from e

        context = {}
        html = render_markdown(text, context=context)
        if pretty:
            html = BeautifulSoup(html, 'html.parser').prettify()

        if output:
            Path(output).write_text(html, encoding='utf-8')
            self.stdout.write(self.style.SUCCESS(f'Wrote {len(html)} characters to {output}'))
        else:
            self.stdout.write(html)

        errors = context.get('component_errors', [])
        for failure in errors:
            self.stderr.write(
                self.style.WARNING(f'Component {failure.name} failed: {failure.message}')
            )

        if errors and fail_on_error:
            raise CommandError(f'{len(errors)} component(s) failed to render')
