"""
Shared fixtures: an in-memory repository standing in for Fedora.
"""

from typing import Dict, Optional

import pytest

from premis_core.config.settings import PremisConfig
from premis_core.errors import RepositoryError
from premis_core.premis.generator import PremisGenerator
from premis_core.repository.base import (
    Datastream,
    ObjectStore,
    RepositoryObject,
    RepositoryService,
)


FOXML_NO_OBJ = """<?xml version="1.0" encoding="UTF-8"?>
<foxml:digitalObject VERSION="1.1" PID="obj:1"
    xmlns:foxml="info:fedora/fedora-system:def/foxml#"
    xmlns:audit="info:fedora/fedora-system:def/audit#">
  <foxml:objectProperties>
    <foxml:property NAME="info:fedora/fedora-system:def/model#state" VALUE="Active"/>
    <foxml:property NAME="info:fedora/fedora-system:def/model#label" VALUE="Minutes, 1923"/>
    <foxml:property NAME="info:fedora/fedora-system:def/model#createdDate" VALUE="2015-03-02T14:05:11.000Z"/>
  </foxml:objectProperties>
  <foxml:datastream ID="AUDIT" STATE="A" CONTROL_GROUP="X" VERSIONABLE="false">
    <foxml:datastreamVersion ID="AUDIT.0" LABEL="Audit Trail for this object" CREATED="2015-03-02T14:05:11.000Z" MIMETYPE="text/xml">
      <foxml:xmlContent>
        <audit:auditTrail>
          <audit:record ID="AUDREC1">
            <audit:process type="Fedora API-M"/>
            <audit:action>modifyDatastreamByValue</audit:action>
            <audit:componentID>DC</audit:componentID>
            <audit:responsibility>fedoraAdmin</audit:responsibility>
            <audit:date>2015-03-03T09:12:40.000Z</audit:date>
            <audit:justification>Corrected title</audit:justification>
          </audit:record>
        </audit:auditTrail>
      </foxml:xmlContent>
    </foxml:datastreamVersion>
  </foxml:datastream>
  <foxml:datastream ID="DC" STATE="A" CONTROL_GROUP="X" VERSIONABLE="true">
    <foxml:datastreamVersion ID="DC.0" LABEL="Dublin Core Record" CREATED="2015-03-02T14:05:11.000Z" MIMETYPE="text/xml" SIZE="342">
      <foxml:contentDigest TYPE="DISABLED" DIGEST="none"/>
      <foxml:xmlContent>
        <oai_dc:dc xmlns:oai_dc="http://www.openarchives.org/OAI/2.0/oai_dc/" xmlns:dc="http://purl.org/dc/elements/1.1/">
          <dc:title>Minutes, 1923</dc:title>
        </oai_dc:dc>
      </foxml:xmlContent>
    </foxml:datastreamVersion>
    <foxml:datastreamVersion ID="DC.1" LABEL="Dublin Core Record" CREATED="2015-03-03T09:12:40.000Z" MIMETYPE="text/xml" SIZE="351">
      <foxml:contentDigest TYPE="DISABLED" DIGEST="none"/>
      <foxml:xmlContent>
        <oai_dc:dc xmlns:oai_dc="http://www.openarchives.org/OAI/2.0/oai_dc/" xmlns:dc="http://purl.org/dc/elements/1.1/">
          <dc:title>Board minutes, 1923</dc:title>
        </oai_dc:dc>
      </foxml:xmlContent>
    </foxml:datastreamVersion>
  </foxml:datastream>
</foxml:digitalObject>
"""

FOXML_WITH_OBJ = """<?xml version="1.0" encoding="UTF-8"?>
<foxml:digitalObject VERSION="1.1" PID="obj:3"
    xmlns:foxml="info:fedora/fedora-system:def/foxml#">
  <foxml:objectProperties>
    <foxml:property NAME="info:fedora/fedora-system:def/model#createdDate" VALUE="2016-07-19T10:00:00.000Z"/>
  </foxml:objectProperties>
  <foxml:datastream ID="OBJ" STATE="A" CONTROL_GROUP="M" VERSIONABLE="true">
    <foxml:datastreamVersion ID="OBJ.0" LABEL="page-001.tif" CREATED="2016-07-19T10:00:00.000Z" MIMETYPE="image/tiff" SIZE="52340">
      <foxml:contentDigest TYPE="SHA-1" DIGEST="2fd4e1c67a2d28fced849ee1bb76e7391b93eb12"/>
      <foxml:binaryContent>SUkqAAgAAAA=</foxml:binaryContent>
    </foxml:datastreamVersion>
  </foxml:datastream>
  <foxml:datastream ID="TECHMD" STATE="A" CONTROL_GROUP="M" VERSIONABLE="true">
    <foxml:datastreamVersion ID="TECHMD.0" LABEL="Technical metadata" CREATED="2016-07-19T10:01:00.000Z" MIMETYPE="application/xml" SIZE="310">
      <foxml:contentDigest TYPE="SHA-1" DIGEST="da39a3ee5e6b4b0d3255bfef95601890afd80709"/>
      <foxml:binaryContent>PGZpdHMvPg==</foxml:binaryContent>
    </foxml:datastreamVersion>
  </foxml:datastream>
</foxml:digitalObject>
"""

FITS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<fits xmlns="http://hul.harvard.edu/ois/xml/ns/fits/fits_output" version="1.2.0">
  <identification>
    <identity format="Tagged Image File Format" mimetype="image/tiff"/>
  </identification>
  <fileinfo>
    <size>52340</size>
  </fileinfo>
</fits>
"""


class FakeDatastream(Datastream):

    def __init__(self, object_id: str, dsid: str, content: bytes = b"", state: str = "A",
                 error: Optional[Exception] = None):
        self.object_id = object_id
        self.id = dsid
        self.state = state
        self._content = content
        self._error = error

    def content(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._content


class FakeObject(RepositoryObject):

    def __init__(self, object_id: str, datastreams: Dict[str, FakeDatastream]):
        self.id = object_id
        self.datastreams = datastreams

    def get_datastream(self, dsid: str) -> Optional[FakeDatastream]:
        return self.datastreams.get(dsid)


class FakeRepository(RepositoryService, ObjectStore):
    """Records every call so tests can check what the pipeline asked for."""

    def __init__(self):
        self.exports: Dict[str, str] = {}
        self.failing_exports = set()
        self.objects: Dict[str, FakeObject] = {}
        self.denied = set()
        self.version = "3.8.1"
        self.describe_error: Optional[Exception] = None
        self.export_calls = []
        self.describe_calls = 0
        self.load_calls = []

    def add_object(self, object_id: str, foxml: str, datastreams: Dict[str, bytes] = None):
        self.exports[object_id] = foxml
        self.objects[object_id] = FakeObject(object_id, {
            dsid: FakeDatastream(object_id, dsid, content)
            for dsid, content in (datastreams or {}).items()
        })

    def export(self, object_id, format="info:fedora/fedora-system:FOXML-1.1",
               context="migrate", encoding="UTF-8"):
        self.export_calls.append((object_id, format, context, encoding))
        if object_id in self.failing_exports:
            raise RepositoryError(f"Connection refused while exporting {object_id}")
        if object_id not in self.exports:
            raise RepositoryError(f"Object not found in low-level storage: {object_id}", status_code=404)
        return self.exports[object_id]

    def describe_repository(self):
        self.describe_calls += 1
        if self.describe_error is not None:
            raise self.describe_error
        return {"repositoryName": "Fedora Repository", "repositoryVersion": self.version}

    def load(self, object_id):
        self.load_calls.append(object_id)
        return self.objects.get(object_id)

    def is_authorized(self, action, datastream):
        return (datastream.object_id, datastream.id) not in self.denied


@pytest.fixture
def repository():
    """Repository with obj:1 (no OBJ), obj:2 (export fails) and obj:3 (OBJ + TECHMD)."""
    repo = FakeRepository()
    repo.add_object("obj:1", FOXML_NO_OBJ, {"DC": b"<dc/>"})
    repo.failing_exports.add("obj:2")
    repo.add_object("obj:3", FOXML_WITH_OBJ, {"OBJ": b"II*\x00", "TECHMD": FITS_XML})
    return repo


@pytest.fixture
def config():
    return PremisConfig()


@pytest.fixture
def generator(repository, config):
    return PremisGenerator(repository, repository, config)
