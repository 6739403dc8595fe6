"""
Streaming chat example.

This example demonstrates:
- Registering and opening a project
- Editing a file with autosave
- Streaming an answer chunk by chunk
- Falling back to another model when a provider key is missing
"""

import asyncio
import sys

from aistudio import AsyncClient, Workspace, CredentialMissingError

BASE_URL = "http://localhost:8000/api/v1"


async def main():
    async with AsyncClient(api_key="not_needed_for_register", base_url=BASE_URL) as anon:
        registered = await anon.auth.register(email="demo@example.com", name="Demo")

    async with AsyncClient(api_key=registered.access_token, base_url=BASE_URL) as client:
        project = await client.projects.create(name="Landing page", description="Streaming demo")
        await client.files.create(project.id, "index.html", "<h1>Hello</h1>", language="html")

        workspace = Workspace(
            client,
            model="gpt-4o",
            fallback_model="gemini-2.5-pro",
            on_chunk=lambda text: print(text, end="", flush=True),
        )
        await workspace.open_project(project.id)
        workspace.edit_file("<h1>Hello, world</h1>")

        print("Assistant: ", end="", flush=True)
        try:
            await workspace.send_message("Make the heading blue and centered")
        except CredentialMissingError as e:
            print(f"\nConfigure {e.required_key} ({e.website}) or save a key with client.api_keys.save()")
            sys.exit(1)
        print()

        await workspace.aclose()


if __name__ == "__main__":
    asyncio.run(main())
