"""
Example: Driving the sandboxed file tools the way an LLM agent would

This example replays a scripted sequence of tool calls against a scratch
directory, the same way a tool calling loop would forward the calls an
LLM makes. At the end it prints the change set that a reviewer (or a
commit step) would look at.
"""

import asyncio
import json
import logging

from agent_file_tools import LLMFileTools, create_temp_dir, read_write

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# What an LLM might ask for while fixing a small bug
SCRIPTED_CALLS = [
    ("create_file", {"path": "app/main.py", "content": "print('helo')\n"}),
    ("find_files", {"pattern": "**/*.py"}),
    ("read_file", {"path": "app/main.py"}),
    ("edit_file", {"path": "app/main.py", "old_content": "helo", "new_content": "hello"}),
    ("create_directory", {"path": "docs"}),
    ("append_file", {"path": "app/main.py", "content": "print('bye')\n"}),
    # Rejected: outside the root
    ("read_file", {"path": "../../etc/passwd"}),
]


async def main():
    root = create_temp_dir("agent-session-")
    tools = read_write(root)
    llm_tools = LLMFileTools(tools)

    print(f"Sandbox root: {root}")
    print(f"Offered tools: {', '.join(llm_tools.tool_names)}\n")

    for name, arguments in SCRIPTED_CALLS:
        result = await llm_tools.execute_tool(tool_name=name, arguments=arguments)
        print(f"{name}({json.dumps(arguments)})")
        print(f"  -> {json.dumps(result)}\n")

    change_set = tools.change_set()
    print(f"{len(change_set)} changes below {change_set.root}:")
    for change in change_set.changes:
        print(f"  {change}")


if __name__ == "__main__":
    asyncio.run(main())
