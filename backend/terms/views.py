# backend/terms/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema
from users.permissions import IsRegistrarRole
from .serializers import AcademicTermSerializer, CreateTermSerializer
from .models import AcademicTerm
from .services import activate_term, create_term, get_active_term


class TermListCreateView(APIView):
    permission_classes = [IsRegistrarRole]

    def get(self, request):
        qs = AcademicTerm.objects.all()
        return Response({"terms": AcademicTermSerializer(qs, many=True).data})

    @extend_schema(request=CreateTermSerializer, responses={201: AcademicTermSerializer})
    def post(self, request):
        s = CreateTermSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        term = create_term(**s.validated_data)
        return Response({"term": AcademicTermSerializer(term).data}, status=201)


class TermActivateView(APIView):
    """
    Marks an existing term as the single active term.
    """
    permission_classes = [IsRegistrarRole]

    def patch(self, request, pk):
        term = activate_term(pk)
        return Response({"term": AcademicTermSerializer(term).data})

    post = patch


class ActiveTermView(APIView):
    """
    Return the active term; {"term": null} means enrollment is not open.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        term = get_active_term()
        return Response({"term": AcademicTermSerializer(term).data if term else None}, status=200)
