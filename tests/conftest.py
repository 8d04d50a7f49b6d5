"""Shared fixtures for hcimporter tests."""

from __future__ import annotations

import io
import zipfile

import pytest

HDFS_SITE = b"""<?xml version="1.0" encoding="UTF-8"?>
<configuration>
  <property>
    <name>dfs.nameservices</name>
    <value>nameservice1</value>
  </property>
</configuration>
"""

CORE_SITE = b"""<?xml version="1.0" encoding="UTF-8"?>
<configuration>
  <property>
    <name>fs.defaultFS</name>
    <value>hdfs://nameservice1</value>
  </property>
  <property>
    <name>hadoop.security.authentication</name>
    <value>simple</value>
  </property>
  <property>
    <name>hadoop.rpc.protection</name>
    <value>authentication</value>
  </property>
  <property>
    <name>hadoop.security.authorization</name>
    <value>false</value>
  </property>
  <property>
    <name>hadoop.security.group.mapping</name>
    <value>org.apache.hadoop.security.ShellBasedUnixGroupsMapping</value>
  </property>
</configuration>
"""

CLIENT_CONFIG_PROPS = {
    "fs.defaultFS": "hdfs://nameservice1",
    "hadoop.security.authentication": "simple",
    "hadoop.rpc.protection": "authentication",
    "hadoop.security.authorization": "false",
    "hadoop.security.group.mapping": "org.apache.hadoop.security.ShellBasedUnixGroupsMapping",
    "dfs.nameservices": "nameservice1",
}


def site_xml(props: dict[str, str]) -> bytes:
    """Render a `*-site.xml` document holding `props`."""
    body = "".join(
        f"<property><name>{name}</name><value>{value}</value></property>"
        for name, value in props.items()
    )
    return f"<configuration>{body}</configuration>".encode()


def make_archive(entries: list[tuple[str, bytes]]) -> bytes:
    """Build a ZIP archive in memory from `(name, content)` pairs, in order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries:
            archive.writestr(name, content)
    return buffer.getvalue()


class NonSeekableStream(io.RawIOBase):
    """A read-only stream without random access, like a pipe."""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, b):
        chunk = self._buffer.read(len(b))
        b[: len(chunk)] = chunk
        return len(chunk)


@pytest.fixture()
def client_config_archive() -> bytes:
    """A client configuration archive like the one a cluster manager hands out."""
    return make_archive(
        [
            ("hadoop-conf/", b""),
            ("hadoop-conf/core-site.xml", CORE_SITE),
            ("hadoop-conf/hdfs-site.xml", HDFS_SITE),
            ("hadoop-conf/log4j.properties", b"log4j.rootLogger=INFO,console\n"),
            ("hadoop-conf/topology.map", b"<topology><node name='a'/></topology>"),
        ]
    )


@pytest.fixture()
def client_config_file(tmp_path, client_config_archive):
    """The client configuration archive written to a local file."""
    path = tmp_path / "hdfs-clientconfig.zip"
    path.write_bytes(client_config_archive)
    return path


def make_corrupt_deflated_archive() -> bytes:
    """A deflated archive with one `core-site.xml` entry whose compressed payload is damaged."""
    name = "core-site.xml"
    content = site_xml({f"prop.{i}": f"value-{i * 7919}" for i in range(50)})
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(name, content)
    data = bytearray(buffer.getvalue())

    # payload starts after the 30 byte local file header and the file name
    payload = 30 + len(name)
    for i in range(payload + 5, payload + 25):
        data[i] ^= 0xFF
    return bytes(data)
