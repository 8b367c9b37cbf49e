"""Tests for the player configuration builder."""

import pytest

from vidply_config.domain.media.models import MediaSource, TextTrack, Track
from vidply_config.domain.player.builder import build
from vidply_config.domain.player.models import Dimensions
from vidply_config.domain.player.options import decode_options


def local_track(title: str = "Clip", mime: str = "video/mp4", **kwargs) -> Track:
    return Track(title=title, type=mime, src=f"/media/{title}.mp4", **kwargs)


def service_track(service: str, title: str = "Embed") -> Track:
    return Track(title=title, type=service, src=f"https://{service}.example/{title}")


class TestCardinality:
    """playlist_data iff 2+ tracks; single-item fields iff exactly one."""

    def test_no_tracks(self):
        config = build([], decode_options(0), Dimensions(), content_uid=4)

        assert config.is_empty is True
        assert config.playlist_data is None
        assert config.video_url is None
        assert config.media_files == ()
        assert config.tracks == ()
        assert config.media_type == "video"
        assert config.service_type is None
        assert config.needs_privacy_layer is False
        assert config.needs_vid_play_engine is True
        assert config.needs_hls_module is False

    def test_single_track(self):
        config = build([local_track()], decode_options(0))

        assert config.is_empty is False
        assert config.is_playlist is False
        assert config.playlist_data is None
        assert len(config.media_files) == 1

    def test_two_tracks_make_a_playlist(self):
        options = decode_options(1 | 2 | 256)
        tracks = [local_track("a"), local_track("b")]

        config = build(tracks, options)

        assert config.is_playlist is True
        assert config.playlist_data.tracks == tuple(tracks)
        playlist_options = config.playlist_data.options
        assert playlist_options.autoplay is True
        assert playlist_options.loop is True
        assert playlist_options.auto_advance is True
        assert playlist_options.show_panel is True
        # No single-item fields
        assert config.video_url is None
        assert config.media_files == ()
        assert config.sources is None
        assert config.poster is None
        assert config.captions == ()
        assert config.needs_playlist_module is True


class TestSingleItemFields:
    @pytest.mark.parametrize("media_type", ["youtube", "vimeo", "soundcloud", "hls", "m3u"])
    def test_stream_types_use_video_url(self, media_type):
        track = Track(title="t", type=media_type, src="https://stream.example/x")

        config = build([track])

        assert config.video_url == "https://stream.example/x"
        assert config.media_files == ()

    def test_multiple_sources_are_exposed_without_media_files(self):
        sources = (
            MediaSource(src="/a.mp4", type="video/mp4"),
            MediaSource(src="/a.webm", type="video/webm"),
        )
        track = Track(title="a", type="video/mp4", src="/a.mp4", sources=sources)

        config = build([track])

        assert config.sources == sources
        assert config.media_files == ()
        assert config.video_url is None

    def test_single_source_uses_media_files(self):
        config = build([local_track("clip", mime="audio/mpeg")])

        media_file = config.media_files[0]
        assert media_file.public_url == "/media/clip.mp4"
        assert media_file.mime_type == "audio/mpeg"
        assert media_file.label == "Default"
        assert config.sources is None

    def test_poster_is_mirrored_into_options(self):
        config = build([local_track(poster="/poster.jpg")])
        assert config.poster == "/poster.jpg"
        assert config.options.poster == "/poster.jpg"

    def test_text_tracks_are_split_into_captions_and_chapters(self):
        text_tracks = (
            TextTrack(src="/en.vtt", kind="captions", language_code="en", label="English"),
            TextTrack(src="/desc.vtt", kind="descriptions", language_code="en", label="Descriptions"),
            TextTrack(src="/ch.vtt", kind="chapters", language_code="en", label="Chapters"),
        )

        config = build([local_track(text_tracks=text_tracks)])

        assert [t.src for t in config.captions] == ["/en.vtt", "/desc.vtt"]
        assert [t.src for t in config.chapters] == ["/ch.vtt"]

    def test_descriptions_track_appears_once_and_keeps_its_kind(self):
        description = TextTrack(src="/desc.vtt", kind="descriptions", language_code="en", label="D")

        config = build([local_track(text_tracks=(description,), audio_description_src="/ad.mp4")])

        matches = [t for t in config.captions if t.src == "/desc.vtt"]
        assert len(matches) == 1
        assert matches[0].kind == "descriptions"
        assert config.chapters == ()
        assert len(config.audio_description_tracks) == 1

    def test_audio_description(self):
        config = build([local_track(audio_description_src="/ad.mp4")])

        entry = config.audio_description_tracks[0]
        assert entry.src == "/ad.mp4"
        assert entry.label == "Audio Description"
        assert entry.lang == ""
        assert entry.mime_type == ""
        assert config.options.audio_description_src == "/ad.mp4"
        assert config.options.audio_description_button is True

    def test_sign_language(self):
        config = build([local_track(sign_language_src="/sl.mp4")])

        entry = config.sign_language_tracks[0]
        assert entry.src == "/sl.mp4"
        assert entry.label == "Sign Language"
        assert config.options.sign_language_src == "/sl.mp4"
        assert config.options.sign_language_button is True
        assert config.options.sign_language_position == "bottom-right"
        assert "mimeType" not in config.to_template_data()["signLanguageTracks"][0]

    def test_without_accessibility_sources_options_are_untouched(self):
        options = decode_options(8)
        config = build([local_track()], options)

        assert config.audio_description_tracks == ()
        assert config.sign_language_tracks == ()
        assert config.options.audio_description_button is False
        assert config.options.sign_language_button is False
        assert config.options.controls is True


class TestFlags:
    def test_audio_media_type_from_first_track(self):
        tracks = [local_track(mime="audio/mpeg", media_type="audio"), local_track()]
        assert build(tracks).media_type == "audio"

    def test_declared_type_wins_over_resolved_mime_type(self):
        assert build([local_track(mime="audio/mpeg", media_type="audio")]).media_type == "audio"
        assert build([local_track(mime="audio/mpeg", media_type="video")]).media_type == "video"

    def test_video_record_after_audio_record_is_ignored(self):
        tracks = [local_track(media_type="video"), local_track(mime="audio/mpeg", media_type="audio")]
        assert build(tracks).media_type == "video"

    def test_soundcloud_needs_privacy_layer(self):
        config = build([service_track("soundcloud")])

        assert config.service_type == "soundcloud"
        assert config.needs_privacy_layer is True
        assert config.needs_vid_play_engine is False
        assert config.needs_playlist_module is False

    def test_local_media_needs_native_engine(self):
        config = build([local_track()])

        assert config.service_type is None
        assert config.needs_privacy_layer is False
        assert config.needs_vid_play_engine is True
        assert config.needs_playlist_module is True

    def test_service_type_comes_from_first_track_only(self):
        config = build([local_track(), service_track("youtube")])

        assert config.service_type is None
        assert config.has_external_media is True
        assert config.external_service_types == ("youtube",)
        assert config.is_mixed_playlist is True
        assert config.playlist_data.options.external_service_types == ("youtube",)

    def test_playlist_starting_with_service(self):
        config = build([service_track("vimeo"), local_track()])

        assert config.service_type == "vimeo"
        assert config.needs_privacy_layer is True
        assert config.needs_vid_play_engine is False
        assert config.needs_playlist_module is True

    @pytest.mark.parametrize(
        "hls_type", ["hls", "m3u", "application/x-mpegurl", "application/vnd.apple.mpegURL"]
    )
    def test_hls_detected_inside_local_playlist(self, hls_type):
        tracks = [
            local_track("a"),
            Track(title="live", type=hls_type, src="https://live.example/master.m3u8"),
            local_track("b"),
        ]
        assert build(tracks).needs_hls_module is True

    def test_no_hls_for_local_media(self):
        assert build([local_track("a"), local_track("b")]).needs_hls_module is False


class TestDeterminism:
    def test_identical_inputs_give_identical_output(self):
        tracks = [local_track("a", poster="/p.jpg"), service_track("youtube")]
        options = decode_options(328, volume=0.5)
        dimensions = Dimensions(width=640, height=360)

        first = build(tracks, options, dimensions, content_uid=12)
        second = build(tracks, options, dimensions, content_uid=12)

        assert first == second
        assert first.to_template_data() == second.to_template_data()

    def test_unique_id_derives_from_content_uid(self):
        assert build([], content_uid=42).unique_id == "vidply-42"
        assert build([local_track()], content_uid=42).unique_id == "vidply-42"

    def test_input_options_are_not_mutated(self):
        options = decode_options(0)
        build([local_track(poster="/p.jpg", sign_language_src="/sl.mp4")], options)
        assert options.poster is None
        assert options.sign_language_button is False

    def test_template_data_uses_camel_case(self):
        data = build([local_track(poster="/p.jpg")], content_uid=3).to_template_data()

        assert data["uniqueId"] == "vidply-3"
        assert data["needsVidPlayEngine"] is True
        assert data["mediaFiles"][0]["publicUrl"] == "/media/Clip.mp4"
        assert data["dimensions"] == {"width": 800, "height": 450}

    def test_privacy_settings_cannot_be_changed_after_construction(self):
        config = build([service_track("youtube")])

        with pytest.raises(TypeError):
            config.privacy_settings["youtube"] = None
        assert config.to_template_data()["privacySettings"] == {}
