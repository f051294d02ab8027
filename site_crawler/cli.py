#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawler через командную строку.

Команды:
  crawl     Обойти сайты из seeds и вывести JSON-отчёт
  config    Показать текущую конфигурацию
  proxy     Запустить локальный crawl-прокси

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --seeds, -s         Корневые адреса через запятую (override seeds)
  --max-pages, -l     Макс. число загрузок (override max_pages)
  --concurrency, -n   Число параллельных воркеров
  --no-follow         Только найти ссылки, не добавлять их в очередь
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Пример:
  site-crawler crawl --seeds example.com,docs.example.com --pretty
"""
import asyncio
import sys
from pathlib import Path

import click
from aiohttp import web

from site_crawler import __version__
from site_crawler.config import load_config
from site_crawler.logger import configure
from site_crawler.proxy import create_app
from site_crawler.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteCrawler CLI."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--seeds', '-s', default=None, help='Корневые адреса через запятую')
@click.option(
    '--max-pages', '-l', 'max_pages',
    type=click.IntRange(min=1), default=None,
    help='Макс. число загрузок (override max_pages)'
)
@click.option(
    '--concurrency', '-n',
    type=click.IntRange(min=1), default=None,
    help='Число параллельных воркеров'
)
@click.option('--no-follow', is_flag=True, help='Не добавлять найденные ссылки в очередь')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float, default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, seeds, max_pages, concurrency, no_follow, pretty, crawl_timeout):
    """Обойти сайты и вывести JSON-отчёт в stdout."""
    overrides = {}
    if seeds is not None:
        overrides['seeds'] = seeds
    if max_pages is not None:
        overrides['max_pages'] = max_pages
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if no_follow:
        overrides['follow_links'] = False
    cfg = ctx.obj['config'].model_copy(update=overrides)
    if not cfg.seeds.strip():
        print_error('Не заданы seeds: используйте --seeds или поле seeds в конфиге')

    click.echo(f'Starting crawl: {cfg.seeds}', err=True)
    try:
        if crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            report = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')

    click.echo(report.json(pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


@cli.command('proxy', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='127.0.0.1', show_default=True, help='Адрес для прослушивания')
@click.option('--port', '-p', default=5000, show_default=True, type=int, help='Порт')
@click.pass_context
def proxy(ctx, host, port):
    """Запустить crawl-прокси: GET /crawl?url=<target>."""
    cfg = ctx.obj['config']
    web.run_app(create_app(timeout=cfg.timeout), host=host, port=port, print=None)


if __name__ == "__main__":
    cli()
