from flask import request
from flask_restx import Namespace, Resource

from portfolio.api_responses import created_response, request_payload, success_response
from portfolio.services import get_services

ns_certificates = Namespace("certificates", description="Certificates")


@ns_certificates.route("")
class CertificateList(Resource):
    @ns_certificates.doc("list_certificates")
    def get(self):
        return success_response(get_services().certificates.list())

    @ns_certificates.doc("create_certificate")
    def post(self):
        """Create a certificate that points at an existing image URL"""
        certificate = get_services().certificates.create(request_payload())
        return created_response(certificate, "Certificate created successfully")


@ns_certificates.route("/with-image")
class CertificateWithImage(Resource):
    @ns_certificates.doc("create_certificate_with_image")
    @ns_certificates.response(400, "Missing or invalid image")
    def post(self):
        certificate = get_services().certificates.create_with_image(request_payload(), request.files.get("image"))
        return created_response(certificate, "Certificate created successfully")


@ns_certificates.route("/<string:id>")
@ns_certificates.param("id", "The certificate ID")
@ns_certificates.response(404, "Certificate not found")
class CertificateItem(Resource):
    @ns_certificates.doc("get_certificate")
    def get(self, id):
        return success_response(get_services().certificates.get(id))

    @ns_certificates.doc("update_certificate")
    def put(self, id):
        certificate = get_services().certificates.update(id, request_payload(), image=request.files.get("image"))
        return success_response(certificate, "Certificate updated successfully")

    @ns_certificates.doc("delete_certificate")
    def delete(self, id):
        get_services().certificates.delete(id)
        return success_response(message="Certificate deleted successfully")
