"""
list-groups
Lists groups visible to the token as (id, name), optionally by name search.
"""
from gitlabctl.core.constants import EXIT_OK
from gitlabctl.core.output_formatter import render_groups
from gitlabctl.models.group import Group


def list_groups(client, settings, args) -> int:
    groups = [Group.model_validate(g) for g in client.search_groups(args.search)]
    text = render_groups(groups, tsv=args.tsv)
    if text:
        print(text)
    return EXIT_OK
