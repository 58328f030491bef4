"""
SceneSync command line interface.

Usage:
    scenesync project create "My video"
    scenesync project list
    scenesync scene list <project_id>
    scenesync scene add <project_id> --title "Intro"
    scenesync scene move <project_id> 0 2
    scenesync keyframe add <project_id> <scene_id> Cue1 60 --duration 120
"""
import argparse
import getpass
import os
import sys
from dataclasses import replace
from typing import List, Optional

from src.application.bootstrap import ServiceContainer, initialize_services
from src.features.keyframes.application.keyframe_timeline import KeyframeTimeline
from src.features.projects.domain.project import Project
from src.features.scenes.application.scene_store import OrderedSceneStore
from src.shared.domain.errors import SceneSyncError
from src.shared.infrastructure.persistence.base_repository import RepositoryError
from src.utils.message import Log
from src.utils.time_format import format_clock
from src.utils.tools import prompt_yes_no

USER_ENV = "SCENESYNC_USER"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scenesync", description="Plan scenes against an audio track.")
    parser.add_argument("--db", default=None, help="Path to the SQLite database (default: user data directory)")
    parser.add_argument("--user", default=None, help=f"Identity to act as (default: ${USER_ENV} or the OS user)")
    sub = parser.add_subparsers(dest="group", required=True)

    # project
    project = sub.add_parser("project", help="Manage projects").add_subparsers(dest="command", required=True)
    create = project.add_parser("create", help="Create a project")
    create.add_argument("name")
    project.add_parser("list", help="List your projects")

    # scene
    scene = sub.add_parser("scene", help="Manage the scenes of a project").add_subparsers(dest="command", required=True)
    scene_list = scene.add_parser("list", help="List scenes in order")
    scene_list.add_argument("project_id")

    scene_add = scene.add_parser("add", help="Append a scene")
    scene_add.add_argument("project_id")
    _add_scene_fields(scene_add)

    scene_edit = scene.add_parser("edit", help="Edit a scene")
    scene_edit.add_argument("project_id")
    scene_edit.add_argument("scene_id")
    _add_scene_fields(scene_edit)

    scene_delete = scene.add_parser("delete", help="Delete a scene")
    scene_delete.add_argument("project_id")
    scene_delete.add_argument("scene_id")
    scene_delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    scene_move = scene.add_parser("move", help="Move the scene at one index to another")
    scene_move.add_argument("project_id")
    scene_move.add_argument("from_index", type=int)
    scene_move.add_argument("to_index", type=int)

    # keyframe
    keyframe = sub.add_parser("keyframe", help="Manage keyframes").add_subparsers(dest="command", required=True)
    kf_list = keyframe.add_parser("list", help="List keyframes by time")
    kf_list.add_argument("project_id")

    kf_add = keyframe.add_parser("add", help="Place a keyframe")
    kf_add.add_argument("project_id")
    kf_add.add_argument("scene_id")
    kf_add.add_argument("name")
    kf_add.add_argument("timestamp", type=float, help="Seconds from the start of the track")
    kf_add.add_argument("--duration", type=float, required=True, help="Track duration in seconds")
    kf_add.add_argument("--color", default=None)

    kf_clear = keyframe.add_parser("clear", help="Delete every keyframe of a project")
    kf_clear.add_argument("project_id")

    return parser


def _add_scene_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title")
    parser.add_argument("--description")
    parser.add_argument("--comments")
    parser.add_argument("--still", help="Image file to attach as the scene's still")


def _scene_fields(args, container: ServiceContainer) -> dict:
    fields = {
        name: getattr(args, name)
        for name in ("title", "description", "comments")
        if getattr(args, name) is not None
    }
    if args.still:
        fields["still_url"] = container.still_images.to_data_uri(args.still)
    return fields


def _open_store(container: ServiceContainer, project_id: str) -> OrderedSceneStore:
    store = container.create_scene_store()
    store.load(project_id)
    return store


def _print_scenes(store: OrderedSceneStore) -> None:
    if not len(store):
        print("(no scenes)")
    for scene in store.scenes:
        still = " [still]" if scene.still_url else ""
        print(f"{scene.position:>3}  {scene.id}  {scene.title}{still}")


def _timeline(container: ServiceContainer, project_id: str, duration: Optional[float] = None) -> KeyframeTimeline:
    # Ownership check shared with the scene commands
    _open_store(container, project_id)
    timeline = KeyframeTimeline(
        project_id=project_id,
        duration_provider=lambda: duration,
        repository=container.keyframe_repo,
        event_bus=container.event_bus,
    )
    timeline.load(project_id)
    return timeline


def run(args, container: ServiceContainer) -> int:
    group, command = args.group, args.command

    if group == "project":
        if command == "create":
            project = container.project_repo.create(
                Project(id="", name=args.name, owner_id=container.session.current_user_id)
            )
            print(project.id)
        elif command == "list":
            for project in container.project_repo.list_by_owner(container.session.current_user_id):
                print(f"{project.id}  {project.name}")
        return 0

    if group == "scene":
        store = _open_store(container, args.project_id)
        if command == "list":
            _print_scenes(store)
        elif command == "add":
            scene = store.append(args.project_id, _scene_fields(args, container))
            print(scene.id)
        elif command == "edit":
            scene = store.get(args.scene_id)
            if scene is None:
                Log.error(f"Scene {args.scene_id} not found in project {args.project_id}")
                return 1
            store.update(replace(scene, **_scene_fields(args, container)))
        elif command == "delete":
            scene = store.get(args.scene_id)
            if scene is None:
                Log.error(f"Scene {args.scene_id} not found in project {args.project_id}")
                return 1
            confirm = container.settings.get("confirm_scene_deletion", True) and not args.yes
            if confirm and not prompt_yes_no(f"Delete scene '{scene.title}'?"):
                return 0
            store.delete(scene.id)
            store.compact()
        elif command == "move":
            store.reorder(args.from_index, args.to_index)
            _print_scenes(store)
        return 0

    if group == "keyframe":
        timeline = _timeline(container, args.project_id, getattr(args, "duration", None))
        if command == "list":
            for keyframe in timeline.ordered_by_time():
                print(f"{format_clock(keyframe.timestamp)}  {keyframe.timestamp:>8.2f}s  "
                      f"{keyframe.name}  {keyframe.color}  scene={keyframe.scene_id}")
        elif command == "add":
            keyframe = timeline.add(args.scene_id, args.name, args.color, args.timestamp)
            print(keyframe.id)
        elif command == "clear":
            print(timeline.clear_all())
        return 0

    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    container = initialize_services(args.db, register_atexit=False)
    try:
        container.session.sign_in(args.user or os.getenv(USER_ENV) or getpass.getuser())
        return run(args, container)
    except (SceneSyncError, RepositoryError, ValueError, FileNotFoundError) as e:
        Log.error(str(e))
        return 1
    finally:
        container.cleanup()


if __name__ == "__main__":
    sys.exit(main())
