# ABOUTME: Canned OPF package documents for testing.
# ABOUTME: Provides realistic EPUB 2 and EPUB 3 packages plus a helper to wrap metadata snippets.

from opfmeta.formats.xml import LxmlElement

_PACKAGE_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="{version}" unique-identifier="{unique_id}"{extra}>
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/"
            xmlns:opf="http://www.idpf.org/2007/opf">
{body}
  </metadata>
  <manifest/>
  <spine{spine}/>
</package>
"""


def package_xml(
    body: str,
    version: str = "3.0",
    unique_id: str = "pub-id",
    extra: str = "",
    spine: str = "",
) -> str:
    """Wrap a metadata body in a package document."""
    return _PACKAGE_TEMPLATE.format(
        version=version, unique_id=unique_id, extra=extra, body=body, spine=spine
    )


def package_element(body: str, **kwargs: str) -> LxmlElement:
    """Parse a wrapped metadata body and return the <package> element."""
    return LxmlElement.from_bytes(package_xml(body, **kwargs).encode("utf-8"))


def metadata_element(body: str, **kwargs: str) -> LxmlElement:
    """Parse a wrapped metadata body and return the <metadata> element."""
    package = package_element(body, **kwargs)
    return package.get_first("metadata", "http://www.idpf.org/2007/opf")


EPUB3_METADATA = """
    <dc:identifier id="pub-id">urn:uuid:A1B0D67E-2E81-4DF5-9E67-A64CBE366809</dc:identifier>
    <dc:identifier id="isbn">9780000000001</dc:identifier>
    <dc:language>en</dc:language>
    <dc:language>fr</dc:language>
    <dc:title id="t1">The Great Journey</dc:title>
    <meta refines="#t1" property="title-type">main</meta>
    <meta refines="#t1" property="file-as">Great Journey, The</meta>
    <meta refines="#t1" property="alternate-script" xml:lang="fr">Le Grand Voyage</meta>
    <dc:title id="t2">A Tale of Travels</dc:title>
    <meta refines="#t2" property="title-type">subtitle</meta>
    <meta refines="#t2" property="display-seq">2</meta>
    <dc:title id="t3">Book One</dc:title>
    <meta refines="#t3" property="title-type">subtitle</meta>
    <meta refines="#t3" property="display-seq">1</meta>
    <dc:creator id="creator01">Jane Doe</dc:creator>
    <meta refines="#creator01" property="role" scheme="marc:relators">aut</meta>
    <meta refines="#creator01" property="file-as">Doe, Jane</meta>
    <dc:creator id="creator02">John Smith</dc:creator>
    <meta refines="#creator02" property="role" scheme="marc:relators">ill</meta>
    <dc:contributor id="contrib01">Marie Curie</dc:contributor>
    <meta refines="#contrib01" property="role" scheme="marc:relators">trl</meta>
    <meta refines="#contrib01" property="role" scheme="marc:relators">edt</meta>
    <dc:contributor>Anonymous Helper</dc:contributor>
    <dc:publisher>Acme Books</dc:publisher>
    <meta property="media:narrator">Nora Reader</meta>
    <meta property="media:duration">1:02:03.5</meta>
    <dc:date>2019-05-01</dc:date>
    <meta property="dcterms:modified">2020-01-15T10:30:00Z</meta>
    <dc:description>A journey across the world.</dc:description>
    <dc:subject>Travel</dc:subject>
    <dc:subject id="subj2">Adventure</dc:subject>
    <meta refines="#subj2" property="authority">BISAC</meta>
    <meta refines="#subj2" property="term">FIC002000</meta>
    <meta property="belongs-to-collection" id="c01">The Journeys</meta>
    <meta refines="#c01" property="collection-type">series</meta>
    <meta refines="#c01" property="group-position">2</meta>
    <meta property="belongs-to-collection" id="c02">Acme Classics</meta>
    <meta refines="#c02" property="collection-type">set</meta>
    <meta property="rendition:layout">pre-paginated</meta>
    <meta property="rendition:flow">scrolled-continuous</meta>
    <meta property="rendition:orientation">landscape</meta>
    <meta property="rendition:spread">portrait</meta>
    <meta property="schema:accessMode">textual</meta>
    <meta refines="#chapter1-audio" property="media:duration">0:32:29</meta>
    <meta name="cover" content="cover-image"/>
    <link rel="record" href="../meta/record.xml" media-type="application/marc"/>
"""

EPUB2_METADATA = """
    <dc:identifier id="bookid" opf:scheme="ISBN">9780000000002</dc:identifier>
    <dc:title>Old Tales</dc:title>
    <dc:creator opf:role="aut" opf:file-as="Author, Old">Old Author</dc:creator>
    <dc:creator opf:role="ill">Some Illustrator</dc:creator>
    <dc:creator>Plain Creator</dc:creator>
    <dc:language>de</dc:language>
    <dc:date opf:event="publication">1901</dc:date>
    <dc:date opf:event="modification">2011-03-04</dc:date>
    <dc:subject>Fiction, Drama; Romance</dc:subject>
    <meta name="calibre:series" content="Tales"/>
    <meta name="calibre:series_index" content="3.5"/>
    <meta name="calibre:title_sort" content="Tales, Old"/>
    <meta name="cover" content="cover"/>
"""

EPUB3_PACKAGE = package_xml(
    EPUB3_METADATA,
    extra=' prefix="schema: http://schema.org/ foaf: http://xmlns.com/foaf/spec/"',
    spine=' page-progression-direction="rtl"',
)

EPUB2_PACKAGE = package_xml(EPUB2_METADATA, version="2.0", unique_id="bookid")

NO_METADATA_PACKAGE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="id">
  <manifest/>
  <spine/>
</package>
"""

DISPLAY_OPTIONS_FIXED = """<?xml version="1.0" encoding="UTF-8"?>
<display_options>
  <platform name="*">
    <option name="fixed-layout">true</option>
    <option name="open-to-spread">false</option>
  </platform>
</display_options>
"""

# Manifest points at a malformed nav document and a chapter missing from the archive.
BROKEN_CONTENT_PACKAGE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:broken-content</dc:identifier>
    <dc:title>Damaged Goods</dc:title>
    <dc:language>en</dc:language>
  </metadata>
  <manifest>
    <item id="nav" href="nav.xhtml" media-type="application/xhtml+xml" properties="nav"/>
    <item id="ch1" href="text/ch1.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine>
    <itemref idref="ch1"/>
  </spine>
</package>
"""
