"""
Mock metadata client for testing orgindexer.

This module provides a hardcoded org with plain, child-bearing and
folder-scoped types so the indexer can run end to end without a remote
platform.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import TransportError
from ..models import TypeDescriptor
from .base import BaseMetadataClient


class MockMetadataClient(BaseMetadataClient):
    """
    Mock client that serves hardcoded metadata.

    Every call is recorded in ``calls`` as an (operation, argument) tuple, and
    any operation can be made to fail for a given argument with ``fail``.
    """

    def __init__(self,
                 descriptors: Optional[List[Dict[str, Any]]] = None,
                 listings: Optional[Dict[str, List[Dict[str, Any]]]] = None,
                 folders: Optional[Dict[Tuple[str, str], List[Dict[str, Any]]]] = None,
                 files: Optional[Dict[Tuple[str, str], Union[str, bytes]]] = None):
        """
        Initialize the mock client, defaulting to the built-in test org.

        Args:
            descriptors: Raw describe entries
            listings: Request name -> item stubs
            folders: (type name, folder name) -> item stubs
            files: (type name, item name) -> file body written on retrieve
        """
        self._descriptors = descriptors if descriptors is not None else self._create_test_descriptors()
        self._listings = listings if listings is not None else self._create_test_listings()
        self._folders = folders if folders is not None else self._create_test_folders()
        self._files = files if files is not None else self._create_test_files()
        self._failures: Dict[Tuple[str, str], Exception] = {}
        self.calls: List[Tuple[str, Any]] = []

    def fail(self, operation: str, argument: str, error: Optional[Exception] = None) -> None:
        """Make ``operation`` raise for ``argument`` (a request, folder or type name)."""
        self._failures[(operation, argument)] = error or TransportError(
            f"{operation} failed for {argument}", operation=operation
        )

    def _record(self, operation: str, argument: Any, key: str) -> None:
        self.calls.append((operation, argument))
        if (operation, key) in self._failures:
            raise self._failures[(operation, key)]

    def calls_for(self, operation: str) -> List[Any]:
        return [argument for name, argument in self.calls if name == operation]

    async def describe(self) -> List[TypeDescriptor]:
        self._record("describe", None, "")
        return [TypeDescriptor.model_validate(entry) for entry in self._descriptors]

    async def list_metadata(self, request_name: str) -> Dict[str, List[Dict[str, Any]]]:
        self._record("list_metadata", request_name, request_name)
        # Copies, since the indexer must not depend on stub identity
        return {request_name: [dict(item) for item in self._listings.get(request_name, [])]}

    async def list_folder(self, type_name: str, folder_name: str) -> Dict[str, List[Dict[str, Any]]]:
        self._record("list_folder", (type_name, folder_name), folder_name)
        contents = self._folders.get((type_name, folder_name), [])
        return {folder_name: [dict(item) for item in contents]}

    async def retrieve_unpackaged(self, members: Dict[str, List[str]], use_zip: bool, dest_dir: str) -> None:
        for type_name in members:
            self._record("retrieve_unpackaged", members, type_name)

        unpackaged = Path(dest_dir) / "unpackaged"
        unpackaged.mkdir(parents=True, exist_ok=True)
        (unpackaged / "package.xml").write_text(self._package_xml(members), encoding="utf-8")

        by_name = {entry["xmlName"]: entry for entry in self._descriptors}
        for type_name, names in members.items():
            descriptor = by_name[type_name]
            type_dir = unpackaged / descriptor["directoryName"]
            type_dir.mkdir(parents=True, exist_ok=True)
            suffix = descriptor.get("suffix", type_name.lower())
            for name in names:
                body = self._files.get((type_name, name))
                path = type_dir / f"{name}.{suffix}"
                if isinstance(body, bytes):
                    path.write_bytes(body)
                elif body is not None:
                    path.write_text(body, encoding="utf-8")

    def _package_xml(self, members: Dict[str, List[str]]) -> str:
        types = "".join(
            "<types>" + "".join(f"<members>{name}</members>" for name in names)
            + f"<name>{type_name}</name></types>"
            for type_name, names in members.items()
        )
        return f'<?xml version="1.0" encoding="UTF-8"?><Package>{types}<version>36.0</version></Package>'

    def _create_test_descriptors(self) -> List[Dict[str, Any]]:
        return [
            {"xmlName": "ApexClass", "directoryName": "classes", "inFolder": False,
             "suffix": "cls", "metaFile": True},
            {"xmlName": "ApexPage", "directoryName": "pages", "inFolder": False,
             "suffix": "page", "metaFile": True},
            {"xmlName": "CustomObject", "directoryName": "objects", "inFolder": False,
             "suffix": "object", "metaFile": False,
             "childXmlNames": ["CustomField", "ListView", "RecordType", "WebLink",
                               "ValidationRule", "SearchLayouts"]},
            {"xmlName": "Workflow", "directoryName": "workflows", "inFolder": False,
             "suffix": "workflow", "metaFile": False,
             "childXmlNames": ["WorkflowAlert", "WorkflowRule", "WorkflowFieldUpdate"]},
            {"xmlName": "Document", "directoryName": "documents", "inFolder": True,
             "metaFile": True},
            {"xmlName": "EmailTemplate", "directoryName": "email", "inFolder": True,
             "suffix": "email", "metaFile": True},
            {"xmlName": "Report", "directoryName": "reports", "inFolder": True,
             "suffix": "report", "metaFile": False},
            {"xmlName": "Dashboard", "directoryName": "dashboards", "inFolder": True,
             "suffix": "dashboard", "metaFile": False},
        ]

    def _create_test_listings(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "ApexClass": [
                {"fullName": "OpportunityTriggerHandler", "fileName": "classes/OpportunityTriggerHandler.cls"},
                {"fileName": "classes/AccountService.cls"},
                {"fullName": "BatchCleanup", "fileName": "classes/BatchCleanup.cls"},
            ],
            "ApexPage": [
                {"fullName": "SiteHome", "fileName": "pages/SiteHome.page"},
            ],
            "CustomObject": [
                {"fullName": "Invoice__c", "fileName": "objects/Invoice__c.object"},
                {"fullName": "Account", "fileName": "objects/Account.object"},
            ],
            "Workflow": [
                {"fullName": "Account", "fileName": "workflows/Account.workflow"},
            ],
            "DocumentFolder": [
                {"fullName": "Shared", "fileName": "documents/Shared"},
                {"fullName": "Logos", "fileName": "documents/Logos"},
            ],
            "EmailFolder": [
                {"fullName": "Marketing", "fileName": "email/Marketing"},
            ],
            "ReportFolder": [
                {"fullName": "Sales", "fileName": "reports/Sales"},
            ],
            "DashboardFolder": [
                {"fullName": "Executive", "fileName": "dashboards/Executive"},
            ],
        }

    def _create_test_folders(self) -> Dict[Tuple[str, str], List[Dict[str, Any]]]:
        return {
            ("Document", "Logos"): [
                {"fullName": "Logos/logo.png"},
                {"fullName": "Logos/banner.jpg"},
            ],
            ("Document", "Shared"): [
                {"fullName": "Shared/terms.pdf"},
            ],
            ("EmailTemplate", "Marketing"): [
                {"fullName": "Marketing/Welcome"},
                {"fullName": "Marketing/Renewal"},
            ],
            ("Report", "Sales"): [
                {"fullName": "Sales/Pipeline"},
            ],
            ("Dashboard", "Executive"): [
                {"fullName": "Executive/Overview"},
            ],
        }

    def _create_test_files(self) -> Dict[Tuple[str, str], str]:
        return {
            ("CustomObject", "Account"): """<?xml version="1.0" encoding="UTF-8"?>
<CustomObject xmlns="http://soap.sforce.com/2006/04/metadata">
    <actionOverrides>
        <actionName>View</actionName>
        <type>Default</type>
    </actionOverrides>
    <enableFeeds>false</enableFeeds>
    <fields>
        <fullName>Region__c</fullName>
        <label>Region</label>
        <type>Text</type>
    </fields>
    <fields>
        <fullName>Tier__c</fullName>
        <label>Tier</label>
        <type>Picklist</type>
    </fields>
    <listViews>
        <fullName>AllAccounts</fullName>
        <filterScope>Everything</filterScope>
    </listViews>
    <searchLayouts>
        <customTabListAdditionalFields>ACCOUNT.NAME</customTabListAdditionalFields>
    </searchLayouts>
</CustomObject>
""",
            ("CustomObject", "Invoice__c"): """<?xml version="1.0" encoding="UTF-8"?>
<CustomObject xmlns="http://soap.sforce.com/2006/04/metadata">
    <deploymentStatus>Deployed</deploymentStatus>
    <fields>
        <fullName>Amount__c</fullName>
        <type>Currency</type>
    </fields>
    <label>Invoice</label>
    <recordTypes>
        <fullName>Standard</fullName>
        <active>true</active>
    </recordTypes>
    <validationRules>
        <fullName>Amount_Positive</fullName>
        <active>true</active>
    </validationRules>
</CustomObject>
""",
            ("Workflow", "Account"): """<?xml version="1.0" encoding="UTF-8"?>
<Workflow xmlns="http://soap.sforce.com/2006/04/metadata">
    <alerts>
        <fullName>Notify_Owner</fullName>
        <description>Notify Owner</description>
    </alerts>
    <rules>
        <fullName>Large_Account</fullName>
        <active>true</active>
    </rules>
</Workflow>
""",
        }
