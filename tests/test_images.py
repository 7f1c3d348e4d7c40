"""End-to-end tests for rwd_images.services.images.ResponsiveImageService."""

import json
import typing

import pytest
from conftest import UPLOADS, photo_metadata

from rwd_images.config import Settings
from rwd_images.models import RenderAttributes
from rwd_images.services.images import ResponsiveImageService, build_image_service
from rwd_images.services.media import InMemoryMediaRepository, LocalMediaRepository, build_repository
from rwd_images.services.renderer import Aspect


class TestRenderResponsiveImage:
    def test_hero_end_to_end(self, service):
        markup = service.render_responsive_image("hero", 1, attributes={"alt": "", "title": ""})
        assert markup == (
            '<picture class="attachment-hero size-hero rwd-picture">\n'
            f'<img srcset="{UPLOADS}/2024/05/photo-400x300.jpg" alt="" title="">\n'
            f'<img srcset="{UPLOADS}/2024/05/photo-1200x900.jpg" alt="" title="">\n'
            "</picture>"
        )

    def test_alt_defaults_to_stored_text_without_tags(self, service):
        markup = service.render_responsive_image("hero", 1)
        assert 'alt="A sunny beach"' in markup

    def test_explicit_attributes(self, service):
        markup = service.render_responsive_image(
            "hero", "1", attributes=RenderAttributes.model_validate({"class": "cover", "title": "Shore"})
        )
        assert '<picture class="cover">' in markup
        assert 'title="Shore"' in markup

    def test_unresolvable_primary_renders_nothing(self, service):
        assert service.render_responsive_image("hero", 404) == ""
        assert service.render_responsive_image("hero", None) == ""

    def test_unknown_size_renders_warning_only(self, service):
        assert service.render_responsive_image("gallery", 1) == '<!-- Unknown image size "gallery" -->\n'

    def test_missing_variant_is_reported_in_markup(self, service, repository):
        repository.add(2, photo_metadata(sizes={"desktop": (1200, 900)}))
        markup = service.render_responsive_image("hero", 2)
        assert markup.startswith('<!-- Attachment 2: missing image size "hero:mobile" -->\n<picture')
        assert "photo-1200x900.jpg" in markup

    def test_nothing_resolved_renders_warnings_only(self, service, repository):
        repository.add(3, photo_metadata(width=100, sizes={"desktop": (1200, 900)}))
        markup = service.render_responsive_image("hero", 3)
        assert markup == '<!-- Attachment 3: missing image size "hero:mobile" -->\n'

    def test_override(self, service, repository):
        repository.add(9, photo_metadata(directory="2022/12", name="crop", sizes={"mobile": (400, 400)}))
        markup = service.render_responsive_image("hero", 1, {"mobile": 9})
        assert f"{UPLOADS}/2022/12/crop-400x400.jpg" in markup

    def test_secure_context(self, service, secure_context):
        markup = service.render_responsive_image("hero", 1, context=secure_context)
        assert "https://example.com/uploads/2024/05/photo-400x300.jpg" in markup
        assert "http://" not in markup

    def test_img_aspect(self, service):
        markup = service.render_responsive_image("hero", 1, aspect="img")
        assert markup.startswith(f'<img src="{UPLOADS}/2024/05/photo-1200x900.jpg"')

    def test_aspects_accepted_by_the_facade(self, service):
        assert typing.get_args(Aspect) == ("picture", "img", "background")
        assert service.render_responsive_image("hero", 1, aspect="background", selector=".x") == ""

    def test_unknown_aspect_is_rejected(self, service):
        with pytest.raises(ValueError):
            service.render_responsive_image("hero", 1, aspect="video")

    def test_render_with_resolution(self, service):
        markup, resolution = service.render_with_resolution("hero", 1)
        assert markup.startswith("<picture")
        assert list(resolution.variants) == ["mobile", "desktop"]
        assert service.render_with_resolution("hero", 404) == ("", None)

    def test_repeated_renders_fetch_metadata_once(self, service, repository):
        service.render_responsive_image("hero", 1)
        service.render_responsive_image("hero", 1)
        assert repository.calls[1] == 1


class TestBuildImageService:
    def test_sizes_file_is_loaded(self, tmp_path):
        sizes_file = tmp_path / "sizes.json"
        sizes_file.write_text(json.dumps({"sets": {"hero": {"mobile": {"size": "400x300"}}}}), encoding="utf-8")
        service = build_image_service(Settings(sizes_file=sizes_file, media_backend="memory"))
        assert service.registry.find_set("hero").breakpoint_keys == ["mobile"]
        assert isinstance(service.repository, InMemoryMediaRepository)

    def test_without_sizes_file(self):
        service = build_image_service(Settings(sizes_file=None, media_backend="memory"))
        assert service.registry.sets == {}

    def test_local_backend(self, tmp_path):
        repository = build_repository(Settings(media_backend="LOCAL", media_root=tmp_path))
        assert isinstance(repository, LocalMediaRepository)

    def test_unsupported_backend(self):
        with pytest.raises(ValueError):
            build_repository(Settings(media_backend="s3"))

    def test_settings_drive_markup(self, registry, repository):
        settings = Settings(uploads_base_url="http://cdn.test/u", picture_class="pic", eol="")
        service = ResponsiveImageService(registry, repository, settings=settings)
        markup = service.render_responsive_image("hero", 1)
        assert markup.startswith('<picture class="pic"><img srcset="http://cdn.test/u/2024/05/')
