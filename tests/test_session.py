import pytest
from PIL import Image

from compare_studio.config.settings import AppSettings, ExportSettings
from compare_studio.core.compositing import CompositeOptions, decode_image
from compare_studio.core.embedders import ThumbnailEmbedder
from compare_studio.core.indexing import SceneIndexBuilder
from compare_studio.core.models import ImageRecord
from compare_studio.session import SessionState
from conftest import exif_block, gradient


@pytest.fixture
def session(tmp_path):
    settings = AppSettings(export=ExportSettings(output_dir=tmp_path / "exports"))
    return SessionState(settings)


def _messages(session):
    return [entry.message for entry in session.logs]


def test_add_images_skips_duplicates_and_unsupported(session, write_photo, tmp_path):
    first = write_photo("one.jpg")
    second = write_photo("two.jpg", exif=exif_block(model="SM-S918B", focal=70))
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")

    added = session.add_images([first, second, first, notes])
    assert [image.name for image in added] == ["one.jpg", "two.jpg"]
    assert added[1].meta.model == "Galaxy S23 Ultra"
    assert _messages(session) == ["Extracting EXIF...", "Ready. Added 2 image(s)."]

    assert session.add_images([first, notes]) == []
    assert session.logs[-1].level == "warn"
    assert session.logs[-1].message == "No new images to add (duplicates or unsupported format)."
    assert len(session.images) == 2


def test_removed_image_can_be_added_again(session, write_photo):
    path = write_photo("one.jpg")
    (image,) = session.add_images([path])
    session.remove_image(image.id)
    assert len(session.add_images([path])) == 1


def test_add_folder_scans_recursively(session, write_photo, tmp_path):
    write_photo("a.jpg")
    nested = tmp_path / "nested"
    nested.mkdir()
    gradient().save(nested / "b.png")
    added = session.add_folder(tmp_path)
    assert sorted(image.name for image in added) == ["a.jpg", "b.png"]


def test_log_history_is_capped(tmp_path):
    session = SessionState(AppSettings(log_history=5))
    for index in range(12):
        session.add_log(f"message {index}")
    assert _messages(session) == [f"message {index}" for index in range(7, 12)]
    session.clear_logs()
    assert session.logs == []


def test_apply_clustering_only_touches_embedded_images(session):
    session.images = [ImageRecord(id=name, locator=b"") for name in "abcd"]
    session.set_embedding("a", [1.0, 0.0])
    session.set_embedding("b", [0.98, 0.1])
    session.set_embedding("c", [0.0, 1.0])
    session.set_embedding("missing", [1.0, 1.0])

    assignment = session.apply_clustering()
    assert set(assignment) == {"a", "b", "c"}
    assert session.get("a").scene_id == session.get("b").scene_id
    assert session.get("d").scene_id is None
    assert session.logs[-1].message == "Grouped 3 image(s) into 2 scene(s)."


def test_scene_groups_label_in_first_seen_order(session):
    session.images = [
        ImageRecord(id="1", locator=b"", scene_id="y"),
        ImageRecord(id="2", locator=b""),
        ImageRecord(id="3", locator=b"", scene_id="x"),
        ImageRecord(id="4", locator=b"", scene_id="y"),
    ]
    groups = session.scene_groups()
    assert [(group.label, group.scene_id) for group in groups] == [
        ("Scene 1", "y"),
        ("Scene 2", "x"),
        ("Unsorted", None),
    ]
    assert [image.id for image in groups[0].images] == ["1", "4"]


def test_scene_groups_empty_session(session):
    assert session.scene_groups() == []


def test_selection_toggles_and_pairs(session):
    left = ImageRecord(id="l", locator=b"", scene_id="s")
    right = ImageRecord(id="r", locator=b"", scene_id="s")
    right.meta.focal_length = 70
    session.images = [left, right]

    assert session.current_pair() is None
    session.select_left(left)
    session.select_right(right)
    pair = session.current_pair()
    assert pair.id == "l:r"
    assert pair.scene_id == "s"
    assert pair.zoom_label == "1X"
    assert pair.layout == "side-by-side"

    session.select_left(left)
    assert session.selected_left is None
    assert session.current_pair() is None


def test_pair_across_scenes_has_no_scene(session):
    left = ImageRecord(id="l", locator=b"", scene_id="s1")
    right = ImageRecord(id="r", locator=b"", scene_id="s2")
    session.select_left(left)
    session.select_right(right)
    assert session.current_pair().scene_id is None


def test_removing_selected_image_clears_selection(session):
    image = ImageRecord(id="x", locator=b"")
    session.images = [image]
    session.select_right(image)
    session.remove_image("x")
    assert session.selected_right is None
    assert session.images == []


def test_clear_images(session, write_photo):
    session.add_images([write_photo("a.jpg"), write_photo("b.jpg")])
    session.select_left(session.images[0])
    session.clear_images()
    assert session.images == []
    assert session.selected_left is None


def test_compare_scene_selects_first_two(session):
    session.images = [
        ImageRecord(id="a", locator=b"", scene_id="s"),
        ImageRecord(id="b", locator=b"", scene_id="t"),
        ImageRecord(id="c", locator=b"", scene_id="s"),
        ImageRecord(id="d", locator=b"", scene_id="s"),
    ]
    pair = session.compare_scene("s")
    assert (pair.left_image.id, pair.right_image.id) == ("a", "c")

    assert session.compare_scene("t") is None
    assert session.logs[-1].level == "warn"


def test_index_scenes_embeds_and_clusters(session, write_photo):
    session.add_images([
        write_photo("a.jpg", gradient()),
        write_photo("b.jpg", gradient(scale=0.8, offset=20)),
        write_photo("c.jpg", gradient(reverse=True)),
    ])
    session.index_scenes(SceneIndexBuilder(ThumbnailEmbedder(), decode_image, show_progress=False))
    a, b, c = session.images
    assert a.scene_id is not None
    assert a.scene_id == b.scene_id != c.scene_id


def test_render_requires_two_selections(session):
    assert session.render_current_pair() is None
    assert session.logs[-1].message == "Select two images to compare."


def test_render_logs_decode_failures(session, write_photo):
    good = write_photo("good.jpg")
    bad = write_photo("bad.jpg")
    bad.write_bytes(b"nope")
    session.add_images([good, bad])
    session.select_left(session.images[0])
    session.select_right(session.images[1])

    result = session.render_current_pair(CompositeOptions(footer_bg="white"))
    assert result.canvas.size == (3840, 2160)
    assert set(result.errors) == {"right"}
    assert session.logs[-1].level == "error"
    assert "bad.jpg" in session.logs[-1].message


def test_export_current_pair(session, write_photo):
    session.add_images([
        write_photo("a.jpg", exif=exif_block(model="iPhone 15 Pro")),
        write_photo("b.jpg", exif=exif_block(model="Pixel 8 Pro")),
    ])
    session.select_left(session.images[0])
    session.select_right(session.images[1])

    path = session.export_current_pair()
    assert path.name == "compare_iphone-15-pro_vs_pixel-8-pro.jpg"
    with Image.open(path) as img:
        assert img.size == (3840, 2160)
    assert session.logs[-1].message == f"Exported {path.name}."


def test_unreadable_file_is_logged_and_skipped(session, write_photo, tmp_path):
    good = write_photo("good.jpg")
    broken = tmp_path / "broken.jpg"
    broken.mkdir()

    added = session.add_images([good, broken])
    assert [image.name for image in added] == ["good.jpg"]
    errors = [entry.message for entry in session.logs if entry.level == "error"]
    assert len(errors) == 1
    assert errors[0].startswith("Failed to load broken.jpg:")


def test_only_unreadable_files_adds_nothing(session, tmp_path):
    broken = tmp_path / "broken.jpg"
    broken.mkdir()
    assert session.add_images([broken]) == []
    assert session.images == []
    assert session.logs[-1].level == "error"


def test_heic_images_are_imported_and_rendered(session, tmp_path):
    path = tmp_path / "shot.heic"
    gradient(400, 300).save(path, format="HEIF")

    (image,) = session.add_images([path])
    assert image.meta.make == "Unknown"
    assert decode_image(path).size == (400, 300)

    session.select_left(image)
    session.select_right(image)
    result = session.render_current_pair()
    assert result.errors == {}
