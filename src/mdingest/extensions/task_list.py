"""Task list extension.

Markdown items written as ``- [ ] todo`` or ``- [x] done`` are rendered by the
``mdit_py_plugins`` task list plugin as checkbox inputs inside generic list
items. The tree is then rewritten into the ``data-type`` markup task list and
task item nodes are parsed from.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import NavigableString
from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from mdingest.adapters.dom import is_text_node
from mdingest.core.extensions import Extension, ExtensionSpec, HookContext


def setup(_context: HookContext, engine: MarkdownIt) -> None:
    engine.use(tasklists_plugin)


def update_dom(context: HookContext, tree: BeautifulSoup) -> None:
    list_type = context.options.get("list_type", "taskList")
    item_type = context.options.get("item_type", "taskItem")

    for task_list in tree.select(".contains-task-list"):
        task_list["data-type"] = list_type

    for item in tree.select(".task-list-item"):
        item["data-type"] = item_type
        checkbox = item.find("input")
        if checkbox is None:
            continue
        item["data-checked"] = "true" if checkbox.has_attr("checked") else "false"
        following = checkbox.next_sibling
        checkbox.decompose()
        # The plugin leaves the space that separated the marker from the label.
        if is_text_node(following) and following.startswith(" "):
            following.replace_with(NavigableString(following[1:]))


TaskList = Extension(
    name="task_list",
    options={"list_type": "taskList", "item_type": "taskItem"},
    markdown=ExtensionSpec(setup=setup, update_dom=update_dom),
)


__all__ = ["TaskList", "setup", "update_dom"]
