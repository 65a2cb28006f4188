from section_autogen.classifiers import default_intent_classifier
from section_autogen.models.section import DraftDocument, GeneratedSection
from section_autogen.post_processor import PostProcessor, section_link


def link(href: str = "#") -> dict:
    return {"label": "Button", "href": {"mode": "url", "value": href}}


def make_document(*specs: tuple[str, object]) -> DraftDocument:
    sections = [
        GeneratedSection(id=f"{section_type}-id", type=section_type, version=1, data=data)
        for section_type, data in specs
    ]
    return DraftDocument(sections=sections)


def test_nav_follows_fixed_order_and_dedupes_labels():
    document = make_document(
        ("hd001", {"logo": "Brand"}),
        ("ct001", {}),
        ("sv002", {}),
        ("sv001", {}),
        ("sh001", {}),
    )
    nav = PostProcessor().build_nav(document.sections)

    assert nav == [
        {"href": section_link("sh001-id"), "label": "Projekty"},
        {"href": section_link("sv001-id"), "label": "Služby"},
        {"href": section_link("ct001-id"), "label": "Kontakt"},
    ]


def test_nav_uses_requested_language():
    document = make_document(("hd001", {}), ("ab001", {}))
    nav = PostProcessor().build_nav(document.sections, language="en")

    assert nav == [{"href": section_link("ab001-id"), "label": "About"}]


def test_header_nav_is_replaced_and_other_fields_kept():
    document = make_document(
        ("hd001", {"logo": "Brand", "nav": [{"label": "Old", "href": "/"}]}),
        ("ab001", {"heading": "O mně"}),
    )
    processed = PostProcessor().process(document)
    header = processed.find("hd001")

    assert header.data["logo"] == "Brand"
    assert header.data["nav"] == [{"href": section_link("ab001-id"), "label": "O mně"}]
    assert document.find("hd001").data["nav"] == [{"label": "Old", "href": "/"}]


def test_processing_is_idempotent():
    document = make_document(
        ("hd001", {"cta": link()}),
        ("h001", {"ctaPrimary": link(), "ctaSecondary": link()}),
        ("sh001", {}),
        ("sv002", {"cta": link()}),
        ("ct001", {"email": "a@b.cz"}),
    )
    processor = PostProcessor()
    once = processor.process(document, website_goal="Kontaktoval mě")
    twice = processor.process(once, website_goal="Kontaktoval mě")

    assert once == twice


def test_ctas_point_at_contact_and_portfolio():
    document = make_document(
        ("hd001", {"cta": link()}),
        ("h002", {"ctaPrimary": link(), "ctaSecondary": link()}),
        ("sh001", {}),
        ("sv002", {"cta": link()}),
        ("ct001", {"cta": link()}),
    )
    processed = PostProcessor().process(document, website_goal="Napište mi e-mail")

    assert processed.find("hd001").data["cta"] == {"label": "Button", "href": section_link("ct001-id")}
    hero = processed.find("h002").data
    assert hero["ctaPrimary"]["href"] == section_link("ct001-id")
    assert hero["ctaSecondary"]["href"] == section_link("sh001-id")
    assert hero["ctaPrimary"]["label"] == "Button"
    assert processed.find("sv002").data["cta"]["href"] == section_link("ct001-id")
    assert processed.find("ct001").data["cta"] == link()


def test_hero_secondary_uses_contact_without_portfolio():
    document = make_document(
        ("h001", {"ctaPrimary": link(), "ctaSecondary": link()}),
        ("ct002", {}),
    )
    hero = PostProcessor().process(document).find("h001").data

    assert hero["ctaSecondary"]["href"] == section_link("ct002-id")


def test_header_cta_only_follows_contact_intent():
    document = make_document(("hd001", {"cta": link()}), ("ct001", {}))

    booking = PostProcessor().process(document, website_goal="Rezervace termínu")
    assert booking.find("hd001").data["cta"] == link()

    no_goal = PostProcessor().process(document)
    assert no_goal.find("hd001").data["cta"] == link()


def test_header_cta_is_created_for_contact_intent():
    document = make_document(("hd001", {"logo": "Brand"}), ("ct001", {}))
    header = PostProcessor().process(document, website_goal="Kontaktoval mě").find("hd001")

    assert header.data["cta"] == {"href": section_link("ct001-id")}


def test_missing_targets_leave_ctas_alone():
    document = make_document(
        ("hd001", {"cta": link()}),
        ("h001", {"ctaPrimary": link(), "ctaSecondary": link()}),
        ("sv002", {"cta": link()}),
    )
    processed = PostProcessor().process(document, website_goal="Kontaktoval mě")

    assert processed.find("h001").data == {"ctaPrimary": link(), "ctaSecondary": link()}
    assert processed.find("sv002").data == {"cta": link()}
    assert processed.find("hd001").data["nav"] == [{"href": section_link("sv002-id"), "label": "Služby"}]


def test_non_object_data_is_skipped():
    document = make_document(("h001", ["unexpected"]), ("ct001", {}))
    processed = PostProcessor().process(document)

    assert processed.find("h001").data == ["unexpected"]


def test_contact_goal_mentioning_facebook_still_rewires_header():
    document = make_document(("hd001", {"cta": link()}), ("ct001", {}))
    header = PostProcessor().process(document, website_goal="Kontaktujte mě přes Facebook").find("hd001")

    assert header.data["cta"]["href"] == section_link("ct001-id")


def test_intent_keywords_match_word_starts():
    classifier = default_intent_classifier()

    assert classifier.classify("kontaktujte mě přes facebook") == "contact"
    assert classifier.classify("napište mi po rozhovoru") == "contact"
    assert classifier.classify("zavolejte mi") == "booking"
    assert classifier.classify("book a call") == "booking"
    assert classifier.classify("rezervace termínu") == "booking"
